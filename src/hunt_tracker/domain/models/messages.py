"""Inbound viewer channel messages."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from hunt_tracker.domain.models.viewer_session import UNLIMITED_RADIUS


class _InboundMessage(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class AuthenticateMessage(_InboundMessage):
    """Authenticate by viewer id, or by a previously issued session token."""

    type: Literal["authenticate"]
    viewer_id: str | None = Field(default=None, alias="viewerId", min_length=1)
    session_token: str | None = Field(default=None, alias="sessionToken", min_length=1)

    @model_validator(mode="after")
    def _require_identity(self) -> "AuthenticateMessage":
        if self.viewer_id is None and self.session_token is None:
            raise ValueError("viewerId or sessionToken is required")
        return self


class UpdateNotificationSettingsMessage(_InboundMessage):
    type: Literal["updateNotificationSettings"]
    enabled: bool
    proximity_radius: float = Field(default=0.5, alias="proximityRadius", ge=0, allow_inf_nan=False)
    ghost_radius: float = Field(
        default=UNLIMITED_RADIUS, alias="ghostRadius", allow_inf_nan=False
    )
    own_participant_id: str | None = Field(default=None, alias="ownParticipantId")

    @property
    def normalized_ghost_radius(self) -> float:
        """Any negative radius means unlimited."""
        return UNLIMITED_RADIUS if self.ghost_radius < 0 else self.ghost_radius


class ReportLiveLocationMessage(_InboundMessage):
    type: Literal["reportLiveLocation"]
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class ClearLiveLocationMessage(_InboundMessage):
    type: Literal["clearLiveLocation"]


InboundMessage = Annotated[
    AuthenticateMessage
    | UpdateNotificationSettingsMessage
    | ReportLiveLocationMessage
    | ClearLiveLocationMessage,
    Field(discriminator="type"),
]

INBOUND_MESSAGE_ADAPTER: TypeAdapter[InboundMessage] = TypeAdapter(InboundMessage)
