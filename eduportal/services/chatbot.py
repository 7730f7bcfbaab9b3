"""Keyword help bot. The first keyword found in the message picks the answer."""
from __future__ import annotations

from eduportal.models import UserType

KEYWORD_RESPONSES: tuple[tuple[str, str], ...] = (
    ("portal", "EduPortal brings students, teachers and parents together to manage courses, "
               "attendance, grades and communication in one place."),
    ("system", "The system covers course management, attendance tracking, grading, live meetings, "
               "forums and messaging between students, teachers and parents."),
    ("feature", "Features include course enrollment, attendance tracking, grades and semester results, "
                "live meetings, discussion forums, the monthly leaderboard and parent-teacher chat."),
    ("course", "Browse the courses offered by your department and enroll in them. Enrolled students "
               "can take part in the course discussion forum."),
    ("attendance", "Teachers mark attendance for each class. Your attendance percentage is shown per course."),
    ("grade", "Teachers post grades for assignments and exams. Your overall grade per course is the "
              "average of its grade points."),
    ("result", "Semester results are published by your teachers and appear in your results section."),
    ("meeting", "Teachers can invite students to live meetings. Invitations arrive as notifications."),
    ("forum", "Each course has a discussion forum where you can ask questions and reply to classmates and teachers."),
    ("notification", "Notifications tell you about new grades, results, courses, meeting invitations "
                     "and replies to your posts."),
    ("complaint", "Raise a complaint from your dashboard. Teachers in your department review it and "
                  "you are notified when its status changes."),
    ("leave", "Request leave from your dashboard. You are notified when a teacher approves or rejects it."),
    ("leaderboard", "The monthly leaderboard lists the top students. First place earns 100 performance "
                    "credits and each following place earns 20 fewer."),
)

DEFAULT_RESPONSE = (
    "I can help you find your way around EduPortal. Ask me about courses, attendance, grades, "
    "results, meetings, forums, leave, complaints or the leaderboard."
)

ROLE_HINTS = {
    UserType.STUDENT.value: "As a student, you can find these features on your dashboard.",
    UserType.TEACHER.value: "As a teacher, you can manage these features from your dashboard.",
    UserType.PARENT.value: "As a parent, you can follow your child's progress through these features.",
}


def reply(message: str, user_type: str | None = None) -> str:
    lowered = message.lower()
    response = next((text for keyword, text in KEYWORD_RESPONSES if keyword in lowered), DEFAULT_RESPONSE)
    hint = ROLE_HINTS.get(user_type)
    return f"{response} {hint}" if hint else response
