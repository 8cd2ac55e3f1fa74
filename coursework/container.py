"""
서비스 조립: 생성자 주입만 사용 (DI 프레임워크 없음)

Django settings 는 여기서만 읽고, 서비스에는 평범한 값으로 넘긴다.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from coursework.application.ports.unit_of_work import UnitOfWork
from coursework.application.use_cases.certificates import CertificateService
from coursework.application.use_cases.gradebook import GradebookService
from coursework.application.use_cases.grading import GradingService
from coursework.application.use_cases.progress import ProgressService
from coursework.domain.gradebook.entities import MAX_LIMIT
from coursework.domain.grading.weights import DEFAULT_GRADE_WEIGHTS


@dataclass(frozen=True)
class CourseworkServices:
    grading: GradingService
    progress: ProgressService
    certificates: CertificateService
    gradebook: GradebookService


def build_services(uow_factory: Optional[Callable[[], UnitOfWork]] = None) -> CourseworkServices:
    from django.conf import settings

    if uow_factory is None:
        from coursework.adapters.db.django.uow import DjangoUnitOfWork
        uow_factory = DjangoUnitOfWork

    grading = GradingService(
        uow_factory,
        default_weights=getattr(settings, "COURSEWORK_DEFAULT_GRADE_WEIGHTS", DEFAULT_GRADE_WEIGHTS),
    )
    progress = ProgressService(uow_factory)
    return CourseworkServices(
        grading=grading,
        progress=progress,
        certificates=CertificateService(uow_factory, grading=grading, progress=progress),
        gradebook=GradebookService(
            uow_factory,
            grading=grading,
            max_limit=getattr(settings, "COURSEWORK_GRADEBOOK_MAX_LIMIT", MAX_LIMIT),
        ),
    )
