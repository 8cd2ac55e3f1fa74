"""
Django Unit of Work: transaction.atomic 래퍼 (lazy import)

repository 는 첫 접근 시 생성. 같은 UoW 안에서는 같은 인스턴스를 재사용한다.
"""
from __future__ import annotations


class DjangoUnitOfWork:
    """Django transaction.atomic으로 트랜잭션 경계. 메서드 내부에서 Django import."""

    def __init__(self) -> None:
        self._atomic = None
        self._repos: dict = {}

    def _repo(self, name: str, factory):
        repo = self._repos.get(name)
        if repo is None:
            repo = self._repos[name] = factory()
        return repo

    @property
    def courses(self):
        from coursework.adapters.db.django.repositories_courses import DjangoCourseRepository
        return self._repo("courses", DjangoCourseRepository)

    @property
    def students(self):
        from coursework.adapters.db.django.repositories_courses import DjangoStudentRepository
        return self._repo("students", DjangoStudentRepository)

    @property
    def enrollments(self):
        from coursework.adapters.db.django.repositories_courses import DjangoEnrollmentRepository
        return self._repo("enrollments", DjangoEnrollmentRepository)

    @property
    def lessons(self):
        from coursework.adapters.db.django.repositories_courses import DjangoLessonRepository
        return self._repo("lessons", DjangoLessonRepository)

    @property
    def assignments(self):
        from coursework.adapters.db.django.repositories_grading import DjangoAssignmentRepository
        return self._repo("assignments", DjangoAssignmentRepository)

    @property
    def submissions(self):
        from coursework.adapters.db.django.repositories_grading import DjangoSubmissionRepository
        return self._repo("submissions", DjangoSubmissionRepository)

    @property
    def grade_weights(self):
        from coursework.adapters.db.django.repositories_grading import DjangoGradeWeightsRepository
        return self._repo("grade_weights", DjangoGradeWeightsRepository)

    @property
    def lesson_progress(self):
        from coursework.adapters.db.django.repositories_progress import DjangoLessonProgressRepository
        return self._repo("lesson_progress", DjangoLessonProgressRepository)

    @property
    def certificates(self):
        from coursework.adapters.db.django.repositories_certificates import DjangoCertificateRepository
        return self._repo("certificates", DjangoCertificateRepository)

    def __enter__(self) -> DjangoUnitOfWork:
        from django.db import transaction
        self._atomic = transaction.atomic()
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._atomic is not None:
            self._atomic.__exit__(exc_type, exc_val, exc_tb)
            self._atomic = None

    def commit(self) -> None:
        # atomic() 블록 내에서는 명시적 commit 없음; __exit__ 시 자동
        pass

    def rollback(self) -> None:
        from django.db import transaction
        transaction.set_rollback(True)

    def savepoint(self):
        """항목 단위 격리: 중첩 atomic. 블록 안 실패는 이 savepoint 까지만 롤백."""
        from django.db import transaction
        return transaction.atomic()
