from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlmodel import Session

from eduportal.db import get_session
from eduportal.dependencies import require_staff, require_user
from eduportal.models import User
from eduportal.schemas.academics import AttendanceForm, AttendanceOut, GradeOut
from eduportal.services import attendance_service

router = APIRouter(prefix="/api", tags=["attendance"])


@router.post("/attendance")
def record_attendance(
    form: AttendanceForm,
    current_user: User = Depends(require_staff),
    session: Session = Depends(get_session),
):
    record, created = attendance_service.record_attendance(
        session,
        teacher_email=current_user.email,
        student_email=form.student_email,
        course=form.course,
        day=form.date,
        status=form.status,
    )
    message = "Attendance recorded successfully" if created else "Attendance updated successfully"
    return {"ok": True, "message": message, "attendance": AttendanceOut.model_validate(record)}


@router.get("/attendance/{student_email}")
def student_attendance(student_email: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    records = attendance_service.attendance_for(session, student_email)
    return {"ok": True, "attendance": [AttendanceOut.model_validate(r) for r in records]}


@router.get("/performance/{student_email}")
def student_performance(student_email: str, current_user: User = Depends(require_user), session: Session = Depends(get_session)):
    by_course, grades = attendance_service.performance(session, student_email)
    return {
        "ok": True,
        "attendance": {course: asdict(summary) for course, summary in by_course.items()},
        "grades": [GradeOut.model_validate(g) for g in grades],
    }
