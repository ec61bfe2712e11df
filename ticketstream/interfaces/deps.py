"""
API Dependencies — repository providers bound to the request session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ticketstream.domain.models.commentaire import Commentaire
from ticketstream.domain.models.demande import Demande
from ticketstream.domain.models.user import User
from ticketstream.domain.repositories.commentaire_repository import CommentaireRepository
from ticketstream.domain.repositories.demande_repository import DemandeRepository
from ticketstream.domain.repositories.user_repository import UserRepository
from ticketstream.infrastructure.database import get_db
from ticketstream.infrastructure.repositories.commentaire_repository import SQLAlchemyCommentaireRepository
from ticketstream.infrastructure.repositories.demande_repository import SQLAlchemyDemandeRepository
from ticketstream.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_demande_repository(db: Session = Depends(get_db)) -> DemandeRepository:
    """Get demande repository instance."""
    return SQLAlchemyDemandeRepository(db, Demande)


def get_commentaire_repository(db: Session = Depends(get_db)) -> CommentaireRepository:
    """Get commentaire repository instance."""
    return SQLAlchemyCommentaireRepository(db, Commentaire)
