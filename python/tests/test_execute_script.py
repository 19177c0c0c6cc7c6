"""Tests for the ExecuteScript builder."""

import pytest

from djust_datastar import (
    BuilderConsumedError,
    EmptyConnectionSetError,
    ExecuteScript,
    MissingFieldError,
)
from djust_datastar.events import ExecuteScriptConfig, script_open_tag

from helpers import BrokenConnection, parse_frame


def sent_data(connection):
    frames = connection.drain()
    assert len(frames) == 1
    event, _, data = parse_frame(frames[0])
    assert event == "datastar-patch-elements"
    return data


class TestExecuteScriptEmit:
    def test_single_script_exact_lines(self, datastar, connection):
        datastar.execute_script(connection).script("console.log(1)").emit()

        assert sent_data(connection) == [
            "mode append",
            "selector body",
            "elements <script>",
            "elements console.log(1)",
            "elements </script>",
        ]

    def test_scripts_keep_order(self, datastar, connection):
        datastar.execute_script(connection).script("let a = 1;").script("alert(a);").emit()
        data = sent_data(connection)
        assert data[3:5] == ["elements let a = 1;", "elements alert(a);"]

    def test_multiline_script_is_split(self, datastar, connection):
        datastar.execute_script(connection).script("if (x) {\n    go();\n}").emit()
        data = sent_data(connection)
        assert data[3:6] == ["elements if (x) {", "elements go();", "elements }"]

    def test_script_indentation_is_stripped(self, datastar, connection):
        datastar.execute_script(connection).script("    go();  ").emit()
        assert sent_data(connection)[3] == "elements go();"

    def test_auto_remove_adds_data_effect(self, datastar, connection):
        datastar.execute_script(connection).script("go()").auto_remove(True).emit()
        assert sent_data(connection)[2] == 'elements <script data-effect="el.remove()">'

    def test_auto_remove_false_adds_nothing(self, datastar, connection):
        datastar.execute_script(connection).script("go()").auto_remove(False).emit()
        assert sent_data(connection)[2] == "elements <script>"

    def test_attributes(self, datastar, connection):
        (
            datastar.execute_script(connection)
            .attribute("type", "module")
            .attribute("defer")
            .auto_remove(True)
            .script("go()")
            .emit()
        )
        assert sent_data(connection)[2] == (
            'elements <script data-effect="el.remove()" type="module" defer>'
        )

    def test_attribute_value_is_escaped(self):
        config = ExecuteScriptConfig(scripts=["x"], attributes=[("nonce", 'a"b<c')])
        assert script_open_tag(config) == '<script nonce="a&quot;b&lt;c">'

    def test_attribute_overwrites_same_name(self, datastar, connection):
        (
            datastar.execute_script(connection)
            .attribute("type", "text/javascript")
            .attribute("type", "module")
            .script("go()")
            .emit()
        )
        assert sent_data(connection)[2] == 'elements <script type="module">'

    def test_never_renders_a_template(self, datastar, connection, renderer):
        datastar.execute_script(connection).script("go()").emit()
        renderer.assert_not_called()

    def test_failed_connection_isolated(self, datastar, make_connections):
        first, third = make_connections(2)
        broken = BrokenConnection()
        result = datastar.execute_script([first, broken, third]).script("go()").emit()
        assert result.failed_connections == (broken,)
        assert len(first.drain()) == 1
        assert len(third.drain()) == 1


class TestExecuteScriptFaults:
    def test_no_scripts_fails_before_sending(self, datastar, connection):
        builder = datastar.execute_script(connection).auto_remove(True)
        with pytest.raises(MissingFieldError, match="script"):
            builder.emit()
        assert connection.drain() == []

    @pytest.mark.parametrize("script", [None, "", "  \n "])
    def test_blank_script_rejected(self, datastar, connection, script):
        with pytest.raises(ValueError, match="script cannot be None or empty"):
            datastar.execute_script(connection).script(script)

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_attribute_name_rejected(self, datastar, connection, name):
        with pytest.raises(ValueError, match="name cannot be None or empty"):
            datastar.execute_script(connection).attribute(name, "x")

    def test_empty_connections(self):
        with pytest.raises(EmptyConnectionSetError):
            ExecuteScript([])

    def test_second_emit_raises(self, datastar, connection):
        builder = datastar.execute_script(connection).script("go()")
        builder.emit()
        with pytest.raises(BuilderConsumedError):
            builder.emit()
