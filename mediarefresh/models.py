"""Records shared by the clients, the resolver and the workflows."""

from collections import namedtuple
from dataclasses import dataclass
from enum import Enum


# Every remote call returns one of these instead of raising.
Reply = namedtuple("Reply", ["ok", "data", "status", "error"], defaults=(None, 0, None))


class CommandStatus(str, Enum):
    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @classmethod
    def parse(cls, value):
        """Maps a status string reported by the service onto the four known states."""
        state = str(value or "").strip().lower()
        if state in ("completed", "complete"):
            return cls.COMPLETED
        if state in ("failed", "aborted", "cancelled", "canceled", "orphaned"):
            return cls.FAILED
        if state == "queued":
            return cls.QUEUED
        # 'started' and anything we don't recognise is still in flight
        return cls.RUNNING

    @property
    def terminal(self):
        return self in (CommandStatus.COMPLETED, CommandStatus.FAILED)


class Outcome(Enum):
    SUCCESS = "success"
    NOT_FOUND = "not found"
    FAILURE = "failure"

    @property
    def exit_code(self):
        return {"success": 0, "not found": 2, "failure": 1}[self.value]


@dataclass(frozen=True)
class RemoteEntity:
    """A show, season or episode as reported by a remote service."""
    id: object
    title: str = ""
    path: str = None
    kind: str = None
    slug: str = None
    parent_id: object = None


@dataclass
class Command:
    id: object
    name: str
    status: CommandStatus = CommandStatus.QUEUED


@dataclass(frozen=True)
class RenameItem:
    file_id: object
    existing_path: str = None
    new_path: str = None

    @property
    def needs_rename(self):
        return bool(self.existing_path and self.new_path and self.existing_path != self.new_path)


@dataclass(frozen=True)
class Resolution:
    entity: RemoteEntity = None
    matched_via: str = None

    @property
    def entity_id(self):
        return self.entity.id if self.entity else None

    def __bool__(self):
        return self.entity is not None
