# =============================================================================
# livestock_core/state/session_store.py
# Authenticated session: user, tokens, profile
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from livestock_core.api.gateways import AuthGateway
from livestock_core.errors import LivestockError, StorageError
from livestock_core.logging import get_logger
from livestock_core.services.base_service import ServiceResult
from livestock_core.storage import LocalStorage, TOKENS_KEY, USER_KEY

from .observable import ObservableStore

logger = get_logger(__name__)

LOGIN_FAILED = {"error": "Login failed"}
REGISTRATION_FAILED = {"error": "Registration failed"}
FETCH_USER_FAILED = {"error": "Failed to fetch user"}
CHANGE_PASSWORD_FAILED = {"error": "Failed to change password"}
PROFILE_FAILED = {"error": "Failed to fetch profile"}
PROFILE_UPDATE_FAILED = {"error": "Failed to update profile"}
REFRESH_FAILED = {"error": "Session expired"}


@dataclass
class SessionState:
    """Snapshot of the session"""
    user: Optional[Dict[str, Any]] = None
    tokens: Optional[Dict[str, Any]] = None
    profile: Optional[Dict[str, Any]] = None
    is_authenticated: bool = False
    loading: bool = False
    error: Optional[Any] = None


class SessionStore(ObservableStore[SessionState]):
    """
    Holds who is signed in and the credentials used for every request.

    The session survives restarts through ``LocalStorage`` (keys ``user``
    and ``tokens``); it is read back synchronously on construction.

    Usage:
        session = SessionStore(AuthGateway(client), LocalStorage())
        if not session.login({"email": "a@b.co", "password": "secret"}):
            st.error(session.error)
    """

    def __init__(self, gateway: AuthGateway, storage: LocalStorage):
        self.gateway = gateway
        self.storage = storage
        user = storage.get_item(USER_KEY)
        tokens = storage.get_item(TOKENS_KEY)
        super().__init__(SessionState(
            user=user,
            tokens=tokens,
            is_authenticated=user is not None,
        ))
        if user is not None:
            logger.info("Restored persisted session")

    def _copy_state(self) -> SessionState:
        s = self._state
        return SessionState(
            user=s.user,
            tokens=dict(s.tokens) if s.tokens else s.tokens,
            profile=s.profile,
            is_authenticated=s.is_authenticated,
            loading=s.loading,
            error=s.error,
        )

    # -------------------------------------------------------------------------
    # READ ACCESS
    # -------------------------------------------------------------------------

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self._state.user

    @property
    def tokens(self) -> Optional[Dict[str, Any]]:
        return self.snapshot().tokens

    @property
    def profile(self) -> Optional[Dict[str, Any]]:
        return self._state.profile

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[Any]:
        return self._state.error

    def access_token(self) -> Optional[str]:
        """Current access token; used as the HTTP client's token provider"""
        tokens = self._state.tokens
        return tokens.get("access") if tokens else None

    def refresh_token(self) -> Optional[str]:
        tokens = self._state.tokens
        return tokens.get("refresh") if tokens else None

    # -------------------------------------------------------------------------
    # PERSISTENCE
    # -------------------------------------------------------------------------

    def _persist(self, key: str, value: Any) -> None:
        try:
            self.storage.set_item(key, value)
        except StorageError as e:
            # The in-memory session stays valid for this process
            logger.error(f"Could not persist {key}: {e}")

    def _forget(self) -> None:
        for key in (USER_KEY, TOKENS_KEY):
            if self.storage.remove_item(key):
                continue
            # A null entry reads back as absent, so the session cannot be restored
            try:
                self.storage.set_item(key, None)
            except StorageError as e:
                logger.error(f"Could not clear persisted {key}; it will be restored on restart: {e}")

    def _teardown(self, state: SessionState) -> None:
        state.user = None
        state.tokens = None
        state.profile = None
        state.is_authenticated = False
        self._forget()

    # -------------------------------------------------------------------------
    # AUTHENTICATION
    # -------------------------------------------------------------------------

    def _authenticate(self, operation: str, call, default_error: Dict[str, str]) -> ServiceResult:
        def on_success(state: SessionState, data: Dict[str, Any]) -> None:
            state.user = data.get("user")
            state.tokens = data.get("tokens")
            state.is_authenticated = True
            self._persist(USER_KEY, state.user)
            self._persist(TOKENS_KEY, state.tokens)

        return self._track(operation, call, on_success, default_error=default_error)

    def login(self, credentials: Dict[str, Any]) -> ServiceResult:
        """Sign in; the response carries ``user`` and ``tokens``"""
        return self._authenticate(
            "Logging in",
            lambda: self.gateway.login(credentials),
            LOGIN_FAILED,
        )

    def register(self, user_data: Dict[str, Any]) -> ServiceResult:
        """Create an account and sign in with it"""
        return self._authenticate(
            "Registering",
            lambda: self.gateway.register(user_data),
            REGISTRATION_FAILED,
        )

    def logout(self) -> ServiceResult:
        """
        Sign out. The backend is told to revoke the refresh token when one
        exists; the local session is cleared whatever it answers.
        """
        refresh = self.refresh_token()
        if refresh:
            try:
                self.gateway.logout(refresh)
            except LivestockError as e:
                logger.warning(f"Logout request failed, clearing local session anyway: {e}")

        def reducer(state: SessionState) -> None:
            self._teardown(state)
            state.loading = False

        self._apply(reducer)
        logger.info("Logged out")
        return ServiceResult.ok()

    def get_current_user(self) -> ServiceResult:
        """Reload the signed-in user; any failure ends the session"""
        def on_success(state: SessionState, user: Dict[str, Any]) -> None:
            state.user = user
            self._persist(USER_KEY, user)

        return self._track(
            "Fetching current user",
            self.gateway.get_current_user,
            on_success,
            on_failure=self._teardown,
            default_error=FETCH_USER_FAILED,
        )

    def refresh_access_token(self) -> ServiceResult:
        """
        Exchange the refresh token for a new access token.

        Without a refresh token, or when the backend refuses it, the session
        is torn down.
        """
        refresh = self.refresh_token()
        if not refresh:
            def reducer(state: SessionState) -> None:
                self._teardown(state)
                state.error = REFRESH_FAILED
            self._apply(reducer)
            return ServiceResult.fail(REFRESH_FAILED, error_code="AUTH_001", message=REFRESH_FAILED["error"])

        def on_success(state: SessionState, data: Dict[str, Any]) -> None:
            self._merge_tokens(state, data or {})

        return self._track(
            "Refreshing access token",
            lambda: self.gateway.refresh_token(refresh),
            on_success,
            on_failure=self._teardown,
            default_error=REFRESH_FAILED,
        )

    def change_password(self, data: Dict[str, Any]) -> ServiceResult:
        """Change the password; the session is left untouched either way"""
        return self._track(
            "Changing password",
            lambda: self.gateway.change_password(data),
            lambda state, _: None,
            default_error=CHANGE_PASSWORD_FAILED,
        )

    # -------------------------------------------------------------------------
    # PROFILE
    # -------------------------------------------------------------------------

    def fetch_profile(self) -> ServiceResult:
        def on_success(state: SessionState, profile: Dict[str, Any]) -> None:
            state.profile = profile

        return self._track(
            "Fetching profile",
            self.gateway.get_profile,
            on_success,
            default_error=PROFILE_FAILED,
        )

    def update_profile(
        self,
        data: Dict[str, Any],
        picture: Optional[Tuple[str, Any, str]] = None,
    ) -> ServiceResult:
        """
        Update the profile, optionally uploading a new picture.

        On success the current user is reloaded so name and avatar changes
        show up everywhere.
        """
        def on_success(state: SessionState, profile: Dict[str, Any]) -> None:
            state.profile = profile

        result = self._track(
            "Updating profile",
            lambda: self.gateway.update_profile(data, picture=picture),
            on_success,
            default_error=PROFILE_UPDATE_FAILED,
        )
        if result:
            self.get_current_user()
        return result

    # -------------------------------------------------------------------------
    # LOCAL ACTIONS
    # -------------------------------------------------------------------------

    def _merge_tokens(self, state: SessionState, new: Dict[str, Any]) -> None:
        # A rotated refresh token replaces the old one; absent keys are kept
        merged = dict(state.tokens or {})
        merged.update({k: v for k, v in new.items() if v})
        state.tokens = merged
        self._persist(TOKENS_KEY, state.tokens)

    def update_tokens(self, tokens: Dict[str, Any]) -> None:
        """Replace the stored tokens and persist them"""
        def reducer(state: SessionState) -> None:
            state.tokens = dict(tokens)
            self._persist(TOKENS_KEY, state.tokens)
        self._apply(reducer)

    def clear_error(self) -> None:
        def reducer(state: SessionState) -> None:
            state.error = None
        self._apply(reducer)
