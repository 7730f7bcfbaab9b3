from .user import User, UserType
from .course import Course
from .link_models import Enrollment
from .attendance import AttendanceRecord, AttendanceStatus
from .grade import GradeRecord
from .leaderboard import Leaderboard, LeaderboardEntry
from .semester_result import SemesterResult, SemesterResultLine
from .notification import Notification
from .chat import ChatMessage
from .forum import ForumPost, ForumReply
from .leave import LeaveRequest, LeaveStatus
from .complaint import Complaint, ComplaintStatus

__all__ = [
    "User", "UserType",
    "Course", "Enrollment",
    "AttendanceRecord", "AttendanceStatus",
    "GradeRecord",
    "Leaderboard", "LeaderboardEntry",
    "SemesterResult", "SemesterResultLine",
    "Notification",
    "ChatMessage",
    "ForumPost", "ForumReply",
    "LeaveRequest", "LeaveStatus",
    "Complaint", "ComplaintStatus",
]
