from src.client import state as auth
from src.client.state import AuthState, AuthStatus

USER = {"id": "user_1", "email_id": "a@example.com"}


def test_initial_state_keeps_persisted_token():
    state = auth.initial_state("tok")
    assert state.status is AuthStatus.IDLE
    assert state.token == "tok"
    assert not state.is_authenticated


def test_start_clears_previous_error():
    state = auth.start(AuthState(status=AuthStatus.ERROR, error="boom"))
    assert state.status is AuthStatus.LOADING
    assert state.error is None


def test_succeed_sets_user_and_token():
    state = auth.succeed(auth.start(auth.initial_state()), USER, "tok")
    assert state.is_authenticated
    assert state.user == USER
    assert state.token == "tok"


def test_fail_drops_user_and_token():
    signed_in = auth.succeed(auth.initial_state(), USER, "tok")

    state = auth.fail(signed_in, "Invalid token")

    assert state.status is AuthStatus.ERROR
    assert state.error == "Invalid token"
    assert state.user is None
    assert state.token is None


def test_logout_resets_everything():
    state = auth.logout(auth.succeed(auth.initial_state(), USER, "tok"))
    assert state == AuthState()


def test_clear_error_returns_to_idle():
    state = auth.clear_error(auth.fail(auth.initial_state(), "nope"))
    assert state.status is AuthStatus.IDLE
    assert state.error is None

    signed_in = auth.succeed(auth.initial_state(), USER, "tok")
    assert auth.clear_error(signed_in) == signed_in
