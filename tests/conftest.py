"""
Complaint Portal - Test Configuration and Fixtures
"""
import os
from typing import Any, Dict, Generator, List, Optional, Tuple

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the app reads its settings
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing-only-0123456789'
os.environ['PASSWORD_BCRYPT_ROUNDS'] = '4'
os.environ['NOTIFICATIONS_ASYNC'] = 'false'
os.environ['TIMEZONE'] = 'UTC'
os.environ['LOG_LEVEL'] = 'WARNING'

from app.core.security import get_jwt_manager, get_password_hasher
from app.db.base import Base, import_models
from app.db.init_db import drop_db
from app.db.session import get_db
from app.dependencies import get_dispatcher
from app.main import app
from app.models.base.enums import UserRole, UserStatus
from app.models.user.user import User
from app.services.base.notification_dispatcher import (
    NotificationDispatcher,
    NotificationSender,
    Recipient,
)

fake = Faker()

DEFAULT_PASSWORD = 'testpassword123'


class RecordingNotificationSender(NotificationSender):
    """Keeps every delivered notification in memory."""

    name = "recording"

    def __init__(self):
        self.sent: List[Tuple[str, Recipient, Dict[str, Any]]] = []

    def send(self, event_type: str, recipient: Recipient, payload: Dict[str, Any]) -> None:
        self.sent.append((event_type, recipient, payload))

    def events(self, event_type: Optional[str] = None) -> List[Tuple[str, Recipient, Dict[str, Any]]]:
        return [item for item in self.sent if event_type is None or item[0] == event_type]

    def audiences_for(self, user_id: str, event_type: Optional[str] = None) -> List[str]:
        return [
            payload.get("audience")
            for event, recipient, payload in self.events(event_type)
            if recipient.user_id == user_id
        ]

    def recipient_ids(self, event_type: Optional[str] = None) -> List[str]:
        return [recipient.user_id for _, recipient, _ in self.events(event_type)]

    def clear(self) -> None:
        self.sent.clear()


@pytest.fixture(scope='function')
def engine():
    """In-memory database shared by every connection in one test"""
    import_models()
    test_engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    drop_db(test_engine)
    test_engine.dispose()


@pytest.fixture(scope='function')
def db_session(engine) -> Generator[Session, None, None]:
    """Create a fresh database session for each test"""
    TestSessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def recorder() -> RecordingNotificationSender:
    return RecordingNotificationSender()


@pytest.fixture
def dispatcher(recorder: RecordingNotificationSender) -> NotificationDispatcher:
    """Synchronous dispatcher delivering into the recorder"""
    return NotificationDispatcher(senders=[recorder])


@pytest.fixture
def make_user(db_session: Session):
    """Factory creating users directly in the database"""

    def _make_user(
        role: UserRole = UserRole.STUDENT,
        status: UserStatus = UserStatus.APPROVED,
        password: str = DEFAULT_PASSWORD,
        **fields,
    ) -> User:
        profile: Dict[str, Any] = {}
        if role == UserRole.STUDENT:
            profile = {'college_id': fake.bothify('COL-####'), 'course': 'CS'}
        elif role == UserRole.PROFESSOR:
            profile = {'professor_id': fake.bothify('PROF-###'), 'department': 'CS'}
        profile.update(fields)

        user = User(
            email=profile.pop('email', None) or fake.unique.email().lower(),
            password_hash=get_password_hasher().hash(password),
            full_name=profile.pop('full_name', None) or fake.name(),
            role=role,
            status=status,
            **profile,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def student(make_user) -> User:
    """Approved student in course CS"""
    return make_user(UserRole.STUDENT)


@pytest.fixture
def other_student(make_user) -> User:
    return make_user(UserRole.STUDENT, course='MATH')


@pytest.fixture
def professor(make_user) -> User:
    """Approved professor in department CS"""
    return make_user(UserRole.PROFESSOR)


@pytest.fixture
def admin(make_user) -> User:
    return make_user(UserRole.ADMIN)


@pytest.fixture
def client(db_session: Session, dispatcher: NotificationDispatcher) -> Generator[TestClient, None, None]:
    """Test client bound to the test session and the recording dispatcher"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher

    yield TestClient(app)

    app.dependency_overrides.clear()


def auth_headers_for(user: User) -> Dict[str, str]:
    """Generate authentication headers for a user"""
    token = get_jwt_manager().create_access_token(
        user.id,
        additional_claims={'role': user.role.value, 'email': user.email},
    )
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def student_headers(student: User) -> Dict[str, str]:
    return auth_headers_for(student)


@pytest.fixture
def professor_headers(professor: User) -> Dict[str, str]:
    return auth_headers_for(professor)


@pytest.fixture
def admin_headers(admin: User) -> Dict[str, str]:
    return auth_headers_for(admin)
