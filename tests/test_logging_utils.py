import logging

from diagram_ir.logging_utils import apply_debug_logging, debug_log_call
from diagram_ir.model import Element


def test_debug_log_call_traces_entry_and_exit(caplog):
    logger = logging.getLogger("diagram_ir.tests.trace")

    @debug_log_call(logger)
    def double(value):
        return value * 2

    with caplog.at_level(logging.DEBUG, logger="diagram_ir.tests.trace"):
        assert double(21) == 42

    assert "Entering" in caplog.text
    assert "-> 42" in caplog.text


def test_wrapped_functions_are_not_wrapped_twice():
    logger = logging.getLogger("diagram_ir.tests.trace")
    decorator = debug_log_call(logger)

    def identity(value):
        return value

    wrapped = decorator(identity)
    assert decorator(wrapped) is wrapped


def test_elements_are_summarised_by_name(caplog):
    logger = logging.getLogger("diagram_ir.tests.trace")
    namespace = {"__name__": __name__}

    def describe(element):
        return element.name

    describe.__module__ = __name__
    namespace["describe"] = describe
    namespace["_hidden"] = describe
    apply_debug_logging(namespace, logger=logger)

    assert namespace["_hidden"] is describe
    with caplog.at_level(logging.DEBUG, logger="diagram_ir.tests.trace"):
        namespace["describe"](Element("n1", kind="node"))

    assert "<Element 'n1' kind=node>" in caplog.text
