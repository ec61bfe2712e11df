"""Closed enumerations shared by the domain: user roles and demande status."""

from enum import Enum


class UserRole(str, Enum):
    REGULAR = "ROLE_USER"
    AGENT = "ROLE_AGENT"


class DemandeStatus(str, Enum):
    """Status tokens exchanged over HTTP.

    The database keeps the human-readable labels from ``label``; the mapping
    is done by ``DemandeStatusType`` in the demande model.
    """

    PENDING = "EnAttente"
    IN_PROGRESS = "EnCours"
    DONE = "Terminé"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "DemandeStatus":
        for status, known in _STATUS_LABELS.items():
            if known == label:
                return status
        raise ValueError(f"Unknown demande status label: {label!r}")


_STATUS_LABELS = {
    DemandeStatus.PENDING: "En attente",
    DemandeStatus.IN_PROGRESS: "En cours",
    DemandeStatus.DONE: "Terminé",
}


class SortOrder(str, Enum):
    """Creation-date ordering for demande listings."""

    NEWEST = "recentes"
    OLDEST = "anciennes"
