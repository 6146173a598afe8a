"""Registration flow: the login-or-register state machine.

    ChoosingProvider -> LoginConfirm -> Done
                     -> Registering(step 0..N) -> Done

LoginConfirm may be cancelled back to ChoosingProvider. Registering moves
forward and back between questions; stepping back from the first question
returns to ChoosingProvider. Submitting on the last question is the only
way from Registering into Done.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from backend.src.core.entities.user import AuthProvider, UserRecord
from backend.src.core.exceptions import InvalidTransitionError
from backend.src.core.value_objects.profile_link import ProfileLink


class FlowState(str, Enum):
    CHOOSING_PROVIDER = "choosing_provider"
    LOGIN_CONFIRM = "login_confirm"
    REGISTERING = "registering"
    DONE = "done"


@dataclass(frozen=True)
class WizardQuestion:
    key: str
    label: str
    kind: str = "text"
    required: bool = False
    placeholder: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "kind": self.kind,
            "required": self.required,
            "placeholder": self.placeholder,
        }


WIZARD_QUESTIONS: tuple[WizardQuestion, ...] = (
    WizardQuestion("name", "Display name", required=True, placeholder="Your display name"),
    WizardQuestion("date_of_birth", "Date of birth", kind="date"),
    WizardQuestion("bio", "Short bio", kind="textarea", placeholder="A short introduction"),
    WizardQuestion("cv", "CV", placeholder="CV URL"),
    WizardQuestion("portfolio", "Portfolio", placeholder="Portfolio URL"),
    WizardQuestion("linkedin", "LinkedIn", placeholder="LinkedIn URL"),
    WizardQuestion("twitter", "Twitter/X", placeholder="Twitter/X URL"),
)

LINK_QUESTIONS = ("cv", "portfolio", "linkedin", "twitter")
FILE_FIELDS = ("cv_file_path", "portfolio_file_path")

_QUESTION_KEYS = {q.key for q in WIZARD_QUESTIONS}


@dataclass
class RegistrationFlow:
    """One client's walk through sign-in.

    ``pending_user_id`` is allocated when registration starts so that files
    uploaded mid-wizard can be stored under the final account id.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: FlowState = FlowState.CHOOSING_PROVIDER
    provider: Optional[AuthProvider] = None
    identifier: str = ""
    existing: Optional[UserRecord] = None
    pending_user_id: Optional[str] = None
    step: int = 0
    answers: dict[str, str] = field(default_factory=dict)
    attachments: dict[str, str] = field(default_factory=dict)
    result: Optional[UserRecord] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    # -- queries ---------------------------------------------------------------

    @property
    def total_steps(self) -> int:
        return len(WIZARD_QUESTIONS)

    @property
    def is_last_step(self) -> bool:
        return self.step == self.total_steps - 1

    @property
    def current_question(self) -> Optional[WizardQuestion]:
        if self.state != FlowState.REGISTERING:
            return None
        return WIZARD_QUESTIONS[self.step]

    def can_continue(self) -> bool:
        question = self.current_question
        if question is None:
            return False
        if question.required:
            return bool(self.answers.get(question.key, "").strip())
        return True

    # -- transitions -----------------------------------------------------------

    def _require(self, *states: FlowState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise InvalidTransitionError(
                f"Flow {self.id} is in state {self.state.value}; expected {allowed}"
            )

    def _touch(self) -> None:
        self.updated_at = datetime.utcnow()

    def choose_provider(
        self,
        provider: AuthProvider,
        identifier: str,
        existing: Optional[UserRecord],
    ) -> None:
        self._require(FlowState.CHOOSING_PROVIDER)
        self.provider = provider
        self.identifier = identifier
        self.existing = existing
        if existing is not None:
            self.state = FlowState.LOGIN_CONFIRM
        else:
            if self.pending_user_id is None:
                self.pending_user_id = str(uuid.uuid4())
            self.state = FlowState.REGISTERING
            self.step = 0
        self._touch()

    def cancel(self) -> None:
        self._require(FlowState.LOGIN_CONFIRM)
        self.state = FlowState.CHOOSING_PROVIDER
        self.existing = None
        self._touch()

    def confirm_login(self, current: Optional[UserRecord] = None) -> UserRecord:
        """Finish login with *current*, the record as the store holds it now."""
        self._require(FlowState.LOGIN_CONFIRM)
        if current is None:
            raise InvalidTransitionError(
                f"Flow {self.id}: the account for this identity no longer exists"
            )
        self.existing = current
        self.result = current
        self.state = FlowState.DONE
        self._touch()
        return self.result

    def answer(
        self,
        answers: dict[str, Any],
        attachments: Optional[dict[str, str]] = None,
    ) -> None:
        """Record answers and uploaded file URLs; nothing changes if any key is unknown."""
        self._require(FlowState.REGISTERING)
        attachments = attachments or {}
        unknown = sorted(set(answers) - _QUESTION_KEYS)
        if unknown:
            raise ValueError(f"Unknown wizard questions: {', '.join(unknown)}")
        unknown = sorted(set(attachments) - set(FILE_FIELDS))
        if unknown:
            raise ValueError(f"Unknown file fields: {', '.join(unknown)}")
        for key, value in answers.items():
            self.answers[key] = "" if value is None else str(value)
        self.attachments.update(attachments)
        self._touch()

    def next(self) -> None:
        self._require(FlowState.REGISTERING)
        if not self.can_continue():
            raise InvalidTransitionError(
                f"Question '{WIZARD_QUESTIONS[self.step].key}' needs an answer"
            )
        if self.is_last_step:
            raise InvalidTransitionError("Already at the last question; submit instead")
        self.step += 1
        self._touch()

    def back(self) -> None:
        self._require(FlowState.REGISTERING)
        if self.step == 0:
            self.state = FlowState.CHOOSING_PROVIDER
        else:
            self.step -= 1
        self._touch()

    def build_profile(self) -> UserRecord:
        """Assemble the complete candidate profile from the wizard answers."""
        self._require(FlowState.REGISTERING)
        if not self.is_last_step:
            raise InvalidTransitionError("Registration can only be submitted from the last question")
        missing = [q.key for q in WIZARD_QUESTIONS if q.required and not self.answers.get(q.key, "").strip()]
        if missing:
            raise InvalidTransitionError(f"Unanswered required questions: {', '.join(missing)}")

        labels = {q.key: q.label for q in WIZARD_QUESTIONS}
        links = [
            ProfileLink(url=self.answers[key], title=labels[key])
            for key in LINK_QUESTIONS
            if self.answers.get(key, "").strip()
        ]
        return UserRecord(
            id=self.pending_user_id or "",
            name=self.answers.get("name", ""),
            provider=self.provider,
            provider_id=self.identifier,
            date_of_birth=self.answers.get("date_of_birth"),
            bio=self.answers.get("bio"),
            links=links,
            cv_file_path=self.attachments.get("cv_file_path"),
            portfolio_file_path=self.attachments.get("portfolio_file_path"),
        )

    def complete(self, record: UserRecord) -> None:
        self._require(FlowState.REGISTERING)
        self.result = record
        self.state = FlowState.DONE
        self._touch()

    def to_dict(self) -> dict[str, Any]:
        question = self.current_question
        return {
            "id": self.id,
            "state": self.state.value,
            "provider": self.provider.value if self.provider else None,
            "identifier": self.identifier,
            "existingName": self.existing.name if self.existing else None,
            "pendingUserId": self.pending_user_id,
            "step": self.step,
            "totalSteps": self.total_steps,
            "question": question.to_dict() if question else None,
            "canContinue": self.can_continue(),
            "answers": dict(self.answers),
            "attachments": dict(self.attachments),
            "profile": self.result.to_dict() if self.result else None,
        }
