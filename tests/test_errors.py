"""Tests for pawprint._errors."""

from pawprint._errors import (
    CollisionError,
    ConfigError,
    ExportError,
    FallbackError,
    LinkExtractionError,
    PawprintError,
    RenderError,
    TransientRenderError,
)


class TestErrorHierarchy:
    """All pawprint errors inherit from PawprintError."""

    def test_pawprint_error_is_exception(self) -> None:
        assert issubclass(PawprintError, Exception)

    def test_config_error_inherits(self) -> None:
        assert issubclass(ConfigError, PawprintError)

    def test_transient_is_render_error(self) -> None:
        assert issubclass(TransientRenderError, RenderError)
        assert issubclass(RenderError, PawprintError)

    def test_export_family(self) -> None:
        assert issubclass(CollisionError, ExportError)
        assert issubclass(FallbackError, ExportError)
        assert issubclass(ExportError, PawprintError)

    def test_link_extraction_error_inherits(self) -> None:
        assert issubclass(LinkExtractionError, PawprintError)


class TestCollisionError:
    """CollisionError carries both claimants and the shared path."""

    def test_attributes(self) -> None:
        exc = CollisionError("a/index.html", "/a", "/a/")
        assert exc.destination == "a/index.html"
        assert exc.first == "/a"
        assert exc.second == "/a/"

    def test_message_names_everything(self) -> None:
        message = str(CollisionError("a/index.html", "/a", "/a/"))
        assert "a/index.html" in message
        assert "'/a'" in message
        assert "'/a/'" in message
