"""
Session Readiness
Initializes a session for a user and confirms the durable store can serve it

A freshly saved session is not always visible to the next read (store-side
buffering, replica lag). Anything derived from the session, such as the
CSRF token, must wait until a direct store read returns the record:

    regenerate -> set_user -> save -> verify (poll with exponential backoff)
"""
import asyncio
from enum import Enum
from typing import Awaitable, Callable, Iterable, List, Optional
from storefront.exceptions import SessionNotReadyError, VerificationCancelled
from storefront.logging import getLogger
from storefront.session.session_manager import SessionManager
from storefront.session.store import SessionStore

logger = getLogger(__name__)


class ReadinessState(Enum):
    UNINITIALIZED = 'uninitialized'
    REGENERATING = 'regenerating'
    PERSISTING = 'persisting'
    VERIFYING = 'verifying'
    READY = 'ready'
    FAILED = 'failed'


_TERMINAL_STATES = (ReadinessState.READY, ReadinessState.FAILED)


class InitializationAttempt:
    """
    State of one initialize_with_user call

    READY and FAILED are terminal. Callers retry by starting a new attempt.
    """

    def __init__(self):
        self.state = ReadinessState.UNINITIALIZED
        self.history: List[ReadinessState] = [self.state]
        self.failure: Optional[BaseException] = None
        self.verify_attempts: Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        return self.state in _TERMINAL_STATES

    def transition(self, state: ReadinessState):
        if self.is_terminal:
            raise RuntimeError(
                f"Initialization already finished in state {self.state.value}"
            )
        self.state = state
        self.history.append(state)

    def fail(self, error: BaseException):
        self.failure = error
        self.transition(ReadinessState.FAILED)

    def __repr__(self) -> str:
        return f"<InitializationAttempt state={self.state.value}>"


class CancellationToken:
    """
    Cancels a pending verification

    Example:
        token = CancellationToken()
        task = asyncio.create_task(readiness.verify(sid, cancel_token=token))
        token.cancel('client disconnected')
    """

    def __init__(self):
        self._event = asyncio.Event()
        self.reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = 'cancelled'):
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    async def wait(self):
        await self._event.wait()

    def raise_if_cancelled(self, session_id: Optional[str] = None):
        if self.cancelled:
            raise VerificationCancelled(session_id, self.reason)


async def cancellable_sleep(delay: float, cancel_token: Optional[CancellationToken] = None):
    """
    Sleep for `delay` seconds, waking early if the token is cancelled

    Raises:
        VerificationCancelled: the token fired before the delay elapsed
    """
    if cancel_token is None:
        await asyncio.sleep(delay)
        return

    cancel_token.raise_if_cancelled()
    try:
        await asyncio.wait_for(cancel_token.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return
    cancel_token.raise_if_cancelled()


SleepFunction = Callable[[float, Optional[CancellationToken]], Awaitable[None]]


class SessionReadiness:
    """
    Session initialization with read-after-write verification

    Usage:
        readiness = SessionReadiness(store)
        await readiness.initialize_with_user(session, str(user.id), user.roles)
        csrf_token = Crypto.generate_csrf_token(session.get_id(), secret)

    The delay between verification reads is injectable so tests can run
    the backoff schedule without real sleeps.
    """

    def __init__(
        self,
        store: SessionStore,
        max_attempts: int = None,
        initial_delay: float = None,
        sleep: SleepFunction = None
    ):
        """
        Initialize readiness protocol

        Args:
            store: Durable store that verification reads go to
            max_attempts: Reads before giving up (default: session.VERIFY_MAX_ATTEMPTS)
            initial_delay: Delay in seconds after the first miss, doubled each miss
                (default: session.VERIFY_INITIAL_DELAY)
            sleep: Awaitable delay function taking (delay, cancel_token)
        """
        from storefront.support import Config
        from storefront.defaults import (
            DEFAULT_SESSION_VERIFY_MAX_ATTEMPTS,
            DEFAULT_SESSION_VERIFY_INITIAL_DELAY,
        )

        if max_attempts is None:
            max_attempts = Config.get('session.VERIFY_MAX_ATTEMPTS', DEFAULT_SESSION_VERIFY_MAX_ATTEMPTS)
        if initial_delay is None:
            initial_delay = Config.get('session.VERIFY_INITIAL_DELAY', DEFAULT_SESSION_VERIFY_INITIAL_DELAY)

        self._validate(max_attempts, initial_delay)
        self.store = store
        self.max_attempts = int(max_attempts)
        self.initial_delay = float(initial_delay)
        self._sleep = sleep or cancellable_sleep

    @staticmethod
    def _validate(max_attempts: int, initial_delay: float):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        if initial_delay < 0:
            raise ValueError(f"initial_delay must not be negative, got {initial_delay}")

    def backoff_delay(self, attempt: int, initial_delay: float = None) -> float:
        """
        Delay after a miss on `attempt` (1-indexed)

        100ms, 200ms, 400ms, ... for the default initial delay.
        """
        if initial_delay is None:
            initial_delay = self.initial_delay
        return initial_delay * 2 ** (attempt - 1)

    async def verify(
        self,
        session_id: str,
        max_attempts: int = None,
        initial_delay: float = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> int:
        """
        Poll the store until the session record is visible

        Read errors are logged and counted as a failed attempt; they do not
        end the loop early.

        Args:
            session_id: Session to look for
            max_attempts: Override for the configured attempt limit
            initial_delay: Override for the configured initial delay (seconds)
            cancel_token: Stops the loop before the next read or during a delay

        Returns:
            The attempt (1-indexed) on which the record was found

        Raises:
            SessionNotReadyError: every attempt missed
            VerificationCancelled: the token was cancelled
        """
        if max_attempts is None:
            max_attempts = self.max_attempts
        if initial_delay is None:
            initial_delay = self.initial_delay
        self._validate(max_attempts, initial_delay)

        for attempt in range(1, max_attempts + 1):
            if cancel_token is not None:
                cancel_token.raise_if_cancelled(session_id)

            try:
                record = await self.store.find(session_id)
            except Exception as e:
                logger.error("Session verification store error", extra={
                    'session_id': session_id,
                    'attempt': attempt,
                    'error': str(e),
                })
            else:
                if record is not None:
                    logger.debug("Session verified in store", extra={
                        'session_id': session_id,
                        'attempt': attempt,
                    })
                    return attempt

                logger.warning("Session not found in store", extra={
                    'session_id': session_id,
                    'attempt': attempt,
                    'max_attempts': max_attempts,
                })

            if attempt < max_attempts:
                try:
                    await self._sleep(self.backoff_delay(attempt, initial_delay), cancel_token)
                except VerificationCancelled as e:
                    e.session_id = session_id
                    raise

        raise SessionNotReadyError(session_id, max_attempts)

    async def initialize_with_user(
        self,
        session: SessionManager,
        user_id: str,
        roles: Iterable[str],
        cancel_token: Optional[CancellationToken] = None,
        attempt: Optional[InitializationAttempt] = None
    ) -> InitializationAttempt:
        """
        Start a fresh session for a user and wait until the store serves it

        Steps run strictly in order and each is awaited before the next:
        regenerate, set_user, save, verify. Verification always runs, even
        when save reports success.

        On failure the in-memory payload is cleared so the user is never
        left attached to a session that did not become ready, and the
        error is re-raised.

        Args:
            session: The request's session
            user_id: Authenticated user id
            roles: Role names of the user
            cancel_token: Cancels verification
            attempt: Tracker to record state transitions into

        Returns:
            The attempt, in state READY

        Raises:
            SessionStoreError: regenerate or save failed
            SessionNotReadyError: verification exhausted its attempts
            VerificationCancelled: verification was cancelled
        """
        attempt = attempt or InitializationAttempt()
        attempt.transition(ReadinessState.REGENERATING)

        try:
            await session.regenerate()

            session.set_user(user_id, roles)

            attempt.transition(ReadinessState.PERSISTING)
            await session.save()

            attempt.transition(ReadinessState.VERIFYING)
            attempt.verify_attempts = await self.verify(
                session.get_id(), cancel_token=cancel_token
            )
        except (Exception, asyncio.CancelledError) as e:
            session.flush()
            attempt.fail(e)
            logger.error("Session initialization failed", extra={
                'user_id': user_id,
                'state': attempt.history[-2].value,
                'error': str(e) or e.__class__.__name__,
            })
            raise

        attempt.transition(ReadinessState.READY)
        logger.info("Session initialized and verified in store", extra={
            'user_id': user_id,
            'session_id': session.get_id(),
            'verify_attempts': attempt.verify_attempts,
        })
        return attempt
