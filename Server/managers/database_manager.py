"""
CampusShare Server - Database Manager

This module manages the database connection, schema initialization,
demo account seeding and password hashing.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
import bcrypt

from models.database import Base, User

logger = logging.getLogger(__name__)

# Demo account created on first start so the portal can be tried immediately
DEMO_USER = {
    "username": "student123",
    "password": "password123",
    "name": "John Doe",
    "student_id": "STU2024001",
    "email": "john.doe@uni.edu",
    "course": "Computer Science",
    "year": "2024",
}


def _EnableSqliteForeignKeys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """
    Manages database connection, initialization, and operations
    """

    def __init__(self, db_path: str = "database/campusshare.db"):
        """
        Initialize database manager

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path

        # Ensure database directory exists
        db_dir = Path(db_path).parent
        if db_dir and str(db_dir) != '.':
            db_dir.mkdir(parents=True, exist_ok=True)

        # Requests are served from several threads; sessions are never shared between them
        self.engine = create_engine(
            f"sqlite:///{db_path}",
            echo=False,
            connect_args={"check_same_thread": False}
        )
        event.listen(self.engine, "connect", _EnableSqliteForeignKeys)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    def InitializeDatabase(self, seed_demo_user: bool = True) -> bool:
        """
        Create the users and materials tables if they don't exist and
        optionally seed the demo account.

        Args:
            seed_demo_user: Create student123 / password123 if missing

        Returns:
            bool: True if the demo user was created by this call
        """
        Base.metadata.create_all(bind=self.engine)

        if not seed_demo_user:
            return False

        session = self.SessionLocal()
        try:
            created = self.SeedDemoUser(session)
            session.commit()
            return created
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def SeedDemoUser(self, session) -> bool:
        """
        Insert the demo account if no user with its username exists

        Args:
            session: SQLAlchemy session

        Returns:
            bool: True if the account was inserted
        """
        existing = session.query(User).filter(User.username == DEMO_USER["username"]).first()
        if existing:
            return False

        demo_user = User(
            username=DEMO_USER["username"],
            password_hash=self.HashPassword(DEMO_USER["password"]),
            name=DEMO_USER["name"],
            student_id=DEMO_USER["student_id"],
            email=DEMO_USER["email"],
            course=DEMO_USER["course"],
            year=DEMO_USER["year"],
            created_at=datetime.now(timezone.utc)
        )
        session.add(demo_user)
        logger.info(f"Demo user created: {DEMO_USER['username']} / {DEMO_USER['password']}")
        return True

    @staticmethod
    def HashPassword(password: str) -> str:
        """
        Hash a password using bcrypt
        Truncates to 72 bytes to comply with bcrypt's maximum password length

        Args:
            password: Plain text password

        Returns:
            str: Hashed password (as string)
        """
        password_bytes = password.encode('utf-8')[:72]
        hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt())
        return hashed.decode('utf-8')

    @staticmethod
    def VerifyPassword(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hash
        Truncates to 72 bytes to match how the password was hashed

        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored password hash (as string)

        Returns:
            bool: True if password matches, False otherwise
        """
        password_bytes = plain_password.encode('utf-8')[:72]
        return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))

    def GetSession(self):
        """
        Get a new database session

        Returns:
            Session: SQLAlchemy session
        """
        return self.SessionLocal()

    def Dispose(self) -> None:
        """Close all pooled connections"""
        self.engine.dispose()
