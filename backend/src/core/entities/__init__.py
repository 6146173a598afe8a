from backend.src.core.entities.project_post import ProjectField, ProjectPost, ProjectStage
from backend.src.core.entities.registration_flow import (
    WIZARD_QUESTIONS,
    FlowState,
    RegistrationFlow,
    WizardQuestion,
)
from backend.src.core.entities.user import AuthProvider, PublicProfileView, UserRecord
from backend.src.core.entities.verified_identity import VerifiedIdentity

__all__ = [
    "AuthProvider", "UserRecord", "PublicProfileView", "VerifiedIdentity",
    "FlowState", "RegistrationFlow", "WizardQuestion", "WIZARD_QUESTIONS",
    "ProjectPost", "ProjectField", "ProjectStage",
]
