import pytest

from logframe.api import Logger
from logframe.caller import resolve_caller_name
from logframe.errors import CallerNotFoundError, ErrorCategory


def _acquire_from_function():
    return Logger.instance()


def _entry():
    return resolve_caller_name(_entry.__code__)


def _never_called():
    pass


class Outer:
    class Inner:
        def acquire(self):
            return Logger.instance()

    def acquire_in_closure(self):
        def inner():
            return Logger.instance()

        return inner()

    @staticmethod
    def acquire_static():
        return Logger.instance()


class TestCallerResolution:
    def test_no_argument_names_calling_class(self, installed_factory):
        assert Logger.instance().name == f"{__name__}.TestCallerResolution"

    def test_none_subject_names_calling_class(self, installed_factory):
        assert Logger.instance(None).name == f"{__name__}.TestCallerResolution"

    def test_omitted_and_none_share_the_handle(self, installed_factory):
        assert Logger.instance() is Logger.instance(None)

    def test_nested_class_uses_qualified_name(self, installed_factory):
        logger = Outer.Inner().acquire()
        assert logger.name == f"{__name__}.Outer.Inner"
        assert logger is Logger.instance(Outer.Inner)

    def test_closure_belongs_to_enclosing_class(self, installed_factory):
        assert Outer().acquire_in_closure().name == f"{__name__}.Outer"

    def test_static_method_belongs_to_class(self, installed_factory):
        assert Outer.acquire_static().name == f"{__name__}.Outer"


def test_module_function_uses_module_name(installed_factory):
    assert _acquire_from_function().name == __name__


def test_class_body_uses_class_name(installed_factory):
    class Holder:
        log = Logger.instance()

    assert Holder.log.name == f"{__name__}.{Holder.__qualname__}"
    assert Holder.log is Logger.instance(Holder)


def test_resolver_returns_module_for_plain_function_caller():
    assert _entry() == __name__


def test_missing_entry_point_raises():
    with pytest.raises(CallerNotFoundError) as excinfo:
        resolve_caller_name(_never_called.__code__)

    err = excinfo.value
    assert err.category == ErrorCategory.CALLER_NOT_FOUND
    assert str(err).startswith("caller_not_found:")
    assert err.detail
