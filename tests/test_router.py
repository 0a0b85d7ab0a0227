from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

from clinic_admin.logger import StructuredLogger
from clinic_admin.models.enums import Route
from clinic_admin.ui.router import RouteEntry, Router


class FakeView:
    """Records lifecycle calls into a shared event list."""

    def __init__(self, name: str, events: list[str]) -> None:
        self.name = name
        self._events = events
        self._events.append(f"build:{name}")

    def pack(self, **kwargs: Any) -> None:
        self._events.append(f"pack:{self.name}")

    def destroy(self) -> None:
        self._events.append(f"destroy:{self.name}")


def _router(logger: StructuredLogger) -> tuple[Router, list[str], list[RouteEntry]]:
    events: list[str] = []
    mounted: list[RouteEntry] = []
    router = Router(MagicMock(name="container"), logger=logger, on_navigate=mounted.append)
    for path, title in (
        (Route.INDEX, "Welcome"),
        (Route.LOGIN, "Sign In"),
        (Route.DASHBOARD, "Users"),
    ):
        router.register(path, title, lambda parent, name=str(path): FakeView(name, events))
    return router, events, mounted


def test_navigate_mounts_the_registered_view(logger: StructuredLogger) -> None:
    router, events, mounted = _router(logger)

    router.navigate(Route.LOGIN)

    assert router.current_path == "/login"
    assert events == ["build:/login", "pack:/login"]
    assert [e.title for e in mounted] == ["Sign In"]


def test_previous_view_is_torn_down_before_the_next_is_built(logger: StructuredLogger) -> None:
    router, events, _ = _router(logger)

    router.navigate(Route.DASHBOARD)
    router.navigate(Route.LOGIN)

    assert events == [
        "build:/dashboard", "pack:/dashboard",
        "destroy:/dashboard",
        "build:/login", "pack:/login",
    ]


def test_unknown_path_falls_back_to_index(logger: StructuredLogger) -> None:
    router, events, _ = _router(logger)

    router.navigate("/nowhere")

    assert router.current_path == "/"
    assert events == ["build:/", "pack:/"]


def test_unknown_path_without_index_keeps_current_view(logger: StructuredLogger) -> None:
    router = Router(MagicMock(), logger=logger)
    view = MagicMock()
    router.register(Route.LOGIN, "Sign In", lambda parent: view)
    router.navigate(Route.LOGIN)

    router.navigate("/nowhere")

    assert router.current_path == "/login"
    view.destroy.assert_not_called()


def test_redirect_requested_during_build_wins(logger: StructuredLogger) -> None:
    router, events, mounted = _router(logger)

    def _guarded(parent: Any) -> FakeView:
        view = FakeView("/guarded", events)
        router.navigate(Route.LOGIN)
        return view

    router.register("/guarded", "Guarded", _guarded)
    router.navigate("/guarded")

    assert router.current_path == "/login"
    assert events == [
        "build:/guarded", "pack:/guarded",
        "destroy:/guarded",
        "build:/login", "pack:/login",
    ]
    assert [e.path for e in mounted] == ["/guarded", "/login"]


def test_close_tears_down_without_mounting(logger: StructuredLogger) -> None:
    router, events, _ = _router(logger)
    router.navigate(Route.INDEX)

    router.close()

    assert router.current_view is None
    assert router.current_path is None
    assert events[-1] == "destroy:/"


def test_teardown_errors_do_not_block_navigation(logger: StructuredLogger) -> None:
    router, events, _ = _router(logger)
    broken = MagicMock()
    broken.destroy.side_effect = RuntimeError("widget already gone")
    router.register("/broken", "Broken", lambda parent: broken)
    router.navigate("/broken")

    router.navigate(Route.INDEX)

    assert router.current_path == "/"


def test_register_overwrites_and_has_route(logger: StructuredLogger) -> None:
    router, events, _ = _router(logger)
    assert router.has_route(Route.DASHBOARD)
    assert not router.has_route(Route.ADD_USER)

    router.register(Route.INDEX, "Home", lambda parent: FakeView("home", events))
    router.navigate(Route.INDEX)

    assert events == ["build:home", "pack:home"]
