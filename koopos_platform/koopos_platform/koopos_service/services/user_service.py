"""
User registration and sign-in workflows.
"""
from datetime import datetime
import logging

from sqlalchemy.exc import IntegrityError

from ..auth import PasswordHasher, TokenIssuer
from ..envelope import success
from ..errors import (
    ServiceError,
    invalid_credentials,
    user_already_exists,
    user_invalid_role,
    user_not_found,
)
from ..models import User, UserDetail
from ..repositories import UserRepository
from ..schemas import RestResponse, SignInRequest, SignInResponse, SignUpRequest

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users: UserRepository, hasher: PasswordHasher, tokens: TokenIssuer):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def create_user(self, request: SignUpRequest) -> RestResponse:
        """
        Register a user together with its profile detail.

        The existence checks and both inserts run in the session's single
        transaction. The unique constraints on username and email still decide
        a race between two concurrent registrations; the loser is rolled back
        and reported as a conflict.

        Raises:
            ServiceError: CONFLICT if the username or email is taken,
                          NOT_FOUND if the role does not exist
        """
        taken = []
        if self.users.exists_by_username(request.username):
            taken.append("username")
        if self.users.exists_by_email(request.email):
            taken.append("email")
        if taken:
            logger.warning("User with username: %s or email: %s already exists", request.username, request.email)
            raise ServiceError.conflict(*(user_already_exists(field) for field in taken))
        if not self.users.role_exists(request.role):
            logger.warning("User with username: %s has an invalid role: %s", request.username, request.role)
            raise ServiceError.not_found(user_invalid_role())

        now = datetime.utcnow()
        try:
            user = self.users.add_user(User(
                username=request.username,
                email=request.email,
                password=self.hasher.hash(request.password),
                role_id=request.role,
                created_date=now,
            ))
            self.users.add_detail(UserDetail(
                user=user,
                first_name=request.first_name,
                last_name=request.last_name,
                phone_number=request.phone_number,
                address=request.address,
                created_date=now,
            ))
            self.users.commit()
        except IntegrityError as exc:
            self.users.rollback()
            logger.warning("User with username: %s or email: %s was registered concurrently", request.username, request.email)
            raise ServiceError.conflict(user_already_exists()) from exc
        except Exception:
            self.users.rollback()
            raise

        logger.info("User with username: %s created successfully", request.username)
        return success()

    def sign_in(self, request: SignInRequest) -> RestResponse:
        """
        Authenticate by username or email and issue an access token.

        Every failure while checking the password, including unexpected errors
        from the hasher, is reported as AUTHENTICATION so callers cannot tell
        them apart. Unexpected errors are still logged with their traceback.

        Raises:
            ServiceError: NOT_FOUND if no user matches,
                          AUTHENTICATION if the password does not verify
        """
        user = self.users.find_by_username_or_email(request.username, request.email)
        if user is None:
            logger.info("Sign in for unknown user: username=%s email=%s", request.username, request.email)
            raise ServiceError.not_found(user_not_found())

        try:
            authenticated = self.hasher.verify(request.password, user.password)
        except Exception as exc:
            logger.error("Password verification failed for username: %s", user.username, exc_info=True)
            raise ServiceError.authentication(invalid_credentials()) from exc

        if not authenticated:
            logger.info("User with username: %s is not authenticated", user.username)
            raise ServiceError.authentication(invalid_credentials())

        access_token = self.tokens.issue(user.username)

        logger.info("User with username: %s login successfully", user.username)
        return success(SignInResponse(access_token=access_token))
