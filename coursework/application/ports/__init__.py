from coursework.application.ports.unit_of_work import UnitOfWork
from coursework.application.ports.repositories import (
    AssignmentRepository,
    CertificateRepository,
    CourseRepository,
    EnrollmentRepository,
    GradeWeightsRepository,
    LessonProgressRepository,
    LessonRepository,
    StudentRepository,
    SubmissionRepository,
)

__all__ = [
    "UnitOfWork",
    "AssignmentRepository",
    "CertificateRepository",
    "CourseRepository",
    "EnrollmentRepository",
    "GradeWeightsRepository",
    "LessonProgressRepository",
    "LessonRepository",
    "StudentRepository",
    "SubmissionRepository",
]
