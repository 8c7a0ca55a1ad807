from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Literal
from datetime import datetime
from .models import PLAYERS_PER_TYPE

def _clean_name(value: str, what: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError(f"{what} must not be blank")
    if len(cleaned) > 255:
        raise ValueError(f"{what} must be at most 255 characters")
    return cleaned

def _clean_players(players: List[str]) -> List[str]:
    return [_clean_name(p, "Player name") for p in players]

class CabinetCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        return _clean_name(v, "Cabinet name")

class CabinetUpdate(CabinetCreate):
    pass

class QueueEntryCreate(BaseModel):
    cabinet_id: int
    type: Literal["solo", "duo"]
    players: List[str]

    @field_validator("players")
    @classmethod
    def clean_players(cls, v: List[str]) -> List[str]:
        return _clean_players(v)

    @model_validator(mode="after")
    def players_match_type(self):
        expected = PLAYERS_PER_TYPE[self.type]
        if len(self.players) != expected:
            raise ValueError(f"A {self.type} entry needs exactly {expected} player name(s)")
        return self

class QueueEntryUpdate(BaseModel):
    players: List[str] = Field(min_length=1, max_length=2)

    @field_validator("players")
    @classmethod
    def clean_players(cls, v: List[str]) -> List[str]:
        return _clean_players(v)

class QueueMoveIn(BaseModel):
    target_cabinet_id: Optional[int] = None

class ReorderIn(BaseModel):
    new_order: List[int] = Field(min_length=1)  # front-to-back entry ids

class CabinetRef(BaseModel):
    id: int
    name: str
    class Config:
        from_attributes = True

class QueueEntryOut(BaseModel):
    id: int
    cabinet_id: int
    type: str
    players: List[str]
    position: int
    is_playing: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    class Config:
        from_attributes = True

class QueueEntryWithCabinet(QueueEntryOut):
    cabinet: Optional[CabinetRef] = None

class CabinetOut(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    class Config:
        from_attributes = True

class CabinetWithQueue(CabinetOut):
    queue_items: List[QueueEntryOut] = Field(default_factory=list)

class ActionResult(BaseModel):
    ok: bool
    message: str
