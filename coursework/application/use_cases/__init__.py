from coursework.application.use_cases.grading import GradingService
from coursework.application.use_cases.progress import ProgressService
from coursework.application.use_cases.certificates import CertificateService
from coursework.application.use_cases.gradebook import GradebookService

__all__ = [
    "GradingService",
    "ProgressService",
    "CertificateService",
    "GradebookService",
]
