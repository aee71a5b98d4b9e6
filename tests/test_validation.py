"""Tests for strict-mode action signature validation."""

from __future__ import annotations

import functools

import pytest

from waymark.validation import validate_action_signature

# -- Rule 1: Action must be callable -------------------------------------


def test_non_callable_raises() -> None:
    with pytest.raises(TypeError, match="Action is not callable"):
        validate_action_signature("not a function", "x/", "GET")


# -- Rule 2: Must accept request and response ----------------------------


def test_no_params_raises() -> None:
    def action(): ...

    with pytest.raises(TypeError, match="two positional arguments"):
        validate_action_signature(action, "x/", "GET")


def test_single_param_raises() -> None:
    def action(request): ...

    with pytest.raises(TypeError, match="two positional arguments"):
        validate_action_signature(action, "x/", "GET")


def test_keyword_only_response_raises() -> None:
    def action(request, *, response): ...

    with pytest.raises(TypeError, match="two positional arguments"):
        validate_action_signature(action, "x/", "GET")


def test_request_response_ok() -> None:
    def action(request, response): ...

    validate_action_signature(action, "x/", "GET")


def test_async_action_ok() -> None:
    async def action(request, response): ...

    validate_action_signature(action, "x/", "POST")


def test_varargs_ok() -> None:
    def action(*args): ...

    validate_action_signature(action, "x/", "GET")


def test_bound_method_ok() -> None:
    class UsersController:
        def show(self, request, response): ...

    validate_action_signature(UsersController().show, "x/", "GET")


def test_callable_object_ok() -> None:
    class Action:
        def __call__(self, request, response): ...

    validate_action_signature(Action(), "x/", "GET")


def test_partial_ok() -> None:
    def action(prefix, request, response): ...

    validate_action_signature(functools.partial(action, "p"), "x/", "GET")


# -- Rule 3: Extra parameters need defaults ------------------------------


def test_extra_required_param_raises() -> None:
    def action(request, response, extra): ...

    with pytest.raises(TypeError, match="Extra parameter 'extra' has no default"):
        validate_action_signature(action, "x/", "GET")


def test_extra_keyword_only_required_raises() -> None:
    def action(request, response, *, extra): ...

    with pytest.raises(TypeError, match="Extra parameter 'extra'"):
        validate_action_signature(action, "x/", "GET")


def test_extra_param_with_default_ok() -> None:
    def action(request, response, extra=None, **kwargs): ...

    validate_action_signature(action, "x/", "GET")


def test_message_names_route() -> None:
    def show(request): ...

    with pytest.raises(TypeError, match=r"\[DELETE /api/users/\]"):
        validate_action_signature(show, "/api/users/", "DELETE")
