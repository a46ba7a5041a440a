from services.wizard.engine import (
    SubmitResult,
    UnknownQuestionError,
    WizardEngine,
    WizardFinishedError,
)
from services.wizard.questions import COMPLETE, ENTRY_ID, QUESTIONS, Question, WizardContext

__all__ = [
    "COMPLETE",
    "ENTRY_ID",
    "QUESTIONS",
    "Question",
    "SubmitResult",
    "UnknownQuestionError",
    "WizardContext",
    "WizardEngine",
    "WizardFinishedError",
]
