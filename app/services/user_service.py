"""
사용자 관리 서비스
비즈니스 로직 계층
"""
from sqlalchemy.orm import Session
from app.models.user import User, UserRole
from app.schemas.user import UserCreate, UserUpdate, UserLogin
from app.security.auth import hash_password, verify_password
from app.utils.exceptions import NotFoundException, DuplicateException, UnauthorizedException, store_errors
from app.utils.logging_config import get_logger

logger = get_logger("users")


class UserService:
    """사용자 관리 서비스"""

    @staticmethod
    def create_user(db: Session, user_data: UserCreate, role: UserRole = UserRole.VIEWER) -> User:
        """사용자 생성 (회원가입)"""
        # 중복 확인 (Username 또는 Email)
        with store_errors(db, "Check user uniqueness"):
            existing_user = db.query(User).filter(
                (User.username == user_data.username) | (User.email == user_data.email)
            ).first()

        if existing_user:
            if existing_user.username == user_data.username:
                raise DuplicateException(detail="Username already exists")
            else:
                raise DuplicateException(detail="Email already exists")

        user = User(
            username=user_data.username,
            email=user_data.email,
            password_hash=hash_password(user_data.password),
            full_name=user_data.full_name,
            role=role
        )

        with store_errors(db, "Register user"):
            db.add(user)
            db.commit()
            db.refresh(user)
        logger.info("Registered user %s with role %s", user.username, user.role.value)
        return user

    @staticmethod
    def authenticate_user(db: Session, user_login: UserLogin) -> User:
        """사용자 인증 (로그인 로직)"""
        with store_errors(db, "Authenticate user"):
            user = db.query(User).filter(User.username == user_login.username).first()

        # 유저 미존재 또는 비밀번호 불일치
        if not user or not verify_password(user_login.password, user.password_hash):
            logger.warning("Failed login attempt for username %r", user_login.username)
            raise UnauthorizedException(detail="Invalid username or password")

        # 계정 활성화 여부 확인
        if not user.is_active:
            raise UnauthorizedException(detail="User account is inactive")

        return user

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> User:
        """ID로 사용자 조회"""
        with store_errors(db, f"Load user {user_id}"):
            user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundException(detail=f"User with ID {user_id} not found")
        return user

    @staticmethod
    def update_user(db: Session, user_id: int, user_data: UserUpdate) -> User:
        """사용자 정보 수정"""
        user = UserService.get_user_by_id(db, user_id)

        # 전달된 필드만 업데이트 (Partial Update)
        update_data = user_data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(user, field, value)

        with store_errors(db, f"Update user {user_id}"):
            db.commit()
            db.refresh(user)
        if "role" in update_data or "is_active" in update_data:
            logger.info("User %s now %s (active=%s)", user.username, user.role.value, user.is_active)
        return user
