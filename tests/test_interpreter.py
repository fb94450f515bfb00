# tests/test_interpreter.py
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from chatmarkup import interpreter
from chatmarkup.interpreter import (
    InvalidJSONError, InvalidMiniJSONError, MalformedExpressionError, MiniJSON,
)
from chatmarkup.models import ClickAction, ClickActionType, Color, Grammar
from chatmarkup.utils import plain_text


class TestClassify(unittest.TestCase):

    def test_json_object(self):
        expression = interpreter.classify('{"message-parts":[]}')
        self.assertEqual(expression.grammar, Grammar.JSON)
        self.assertEqual(expression.data, {"message-parts": []})

    def test_mini_json(self):
        self.assertEqual(interpreter.classify("({hover,a,b})").grammar, Grammar.MINI_JSON)
        self.assertEqual(interpreter.classify("{hover,a,b}").grammar, Grammar.MINI_JSON)

    def test_neither(self):
        expression = interpreter.classify("price}")
        self.assertEqual(expression.grammar, Grammar.INVALID)
        self.assertEqual(plain_text(interpreter.interpret(expression)), "price}")


class TestFullForm(unittest.TestCase):
    """Test suite for the JSON object grammar."""

    def test_run_command(self):
        segments = interpreter.format_json_string('{"message-parts":[{"base-text":"Hi","run-command":"/spawn"}]}')
        self.assertEqual(len(segments), 1)
        self.assertEqual(segments[0].text, "Hi")
        self.assertEqual(segments[0].click, ClickAction.run_command("/spawn"))

    def test_hover_and_parts_in_order(self):
        segments = interpreter.format_json({"message-parts": [
            {"base-text": "&aOne", "hover-text": "&cTip"},
            {"base-text": " two"},
        ]})
        self.assertEqual([s.text for s in segments], ["One", " two"])
        self.assertEqual(segments[0].color, Color.legacy("a"))
        self.assertEqual(plain_text(segments[0].hover), "Tip")
        self.assertEqual(segments[0].hover[0].color, Color.legacy("c"))
        self.assertEqual(segments[1].hover, ())
        self.assertIsNone(segments[1].click)

    def test_click_precedence(self):
        part = {
            "base-text": "x",
            "copy-to-clipboard": "copied",
            "open-url": "https://example.com",
            "suggest-command": "/msg ",
        }
        segments = interpreter.format_json({"message-parts": [part]})
        self.assertEqual(segments[0].click.action, ClickActionType.SUGGEST_COMMAND)

        part["run-command"] = "/run"
        segments = interpreter.format_json({"message-parts": [part]})
        self.assertEqual(segments[0].click, ClickAction.run_command("/run"))

        del part["run-command"], part["suggest-command"]
        segments = interpreter.format_json({"message-parts": [part]})
        self.assertEqual(segments[0].click, ClickAction.open_url("https://example.com"))

    def test_non_string_values(self):
        segments = interpreter.format_json({"message-parts": [{"base-text": 42}]})
        self.assertEqual(segments[0].text, "42")

    def test_structural_errors(self):
        bad_objects = [
            {"parts": []},
            {"message-parts": "nope"},
            {"message-parts": ["not an object"]},
            {"message-parts": [{"hover-text": "no base"}]},
        ]
        for bad in bad_objects:
            with self.assertRaises(InvalidJSONError, msg=str(bad)):
                interpreter.format_json(bad)

    def test_missing_message_parts_does_not_fall_back(self):
        """Valid JSON without message-parts is an authoring error, not MiniJSON."""
        expression = interpreter.classify('{"base-text":"Hi"}')
        with self.assertRaises(MalformedExpressionError):
            interpreter.interpret(expression)

    def test_deeply_nested_json(self):
        """JSON too deep to parse is a malformed expression, not a crash."""
        deep = '{"a":' * 2000 + "1" + "}" * 2000
        with self.assertRaises(InvalidJSONError):
            interpreter.classify(deep)
        with self.assertRaises(InvalidJSONError):
            interpreter.format_json_string(deep)

    def test_unparseable_string(self):
        with self.assertRaises(InvalidJSONError):
            interpreter.format_json_string("{not json")
        with self.assertRaises(InvalidJSONError):
            interpreter.format_json_string("[1, 2]")


class TestMiniJSON(unittest.TestCase):
    """Test suite for the compact comma separated grammar."""

    def test_hover(self):
        segments = MiniJSON("({hover,Click me,Tooltip text})").get_segments()
        self.assertEqual(len(segments), 1)
        self.assertEqual(segments[0].text, "Click me")
        self.assertEqual(plain_text(segments[0].hover), "Tooltip text")
        self.assertIsNone(segments[0].click)

    def test_too_few_fields(self):
        with self.assertRaises(InvalidMiniJSONError):
            MiniJSON("({hover,OnlyTwoFields})")
        # Trailing empty fields are not counted
        with self.assertRaises(InvalidMiniJSONError):
            MiniJSON("({hover,a,})")

    def test_errors_are_value_errors(self):
        self.assertTrue(issubclass(InvalidMiniJSONError, ValueError))
        self.assertTrue(issubclass(InvalidJSONError, MalformedExpressionError))

    def test_function_table(self):
        expected = {
            "command": ClickAction.run_command("payload"),
            "run-command": ClickAction.run_command("payload"),
            "suggest-command": ClickAction.suggest_command("payload"),
            "link": ClickAction.open_url("payload"),
            "url": ClickAction.open_url("payload"),
            "open-url": ClickAction.open_url("payload"),
            "clipboard": ClickAction.copy_to_clipboard("payload"),
            "copy-to-clipboard": ClickAction.copy_to_clipboard("payload"),
        }
        for function, click in expected.items():
            segments = MiniJSON("({%s,Text,payload})" % function).get_segments()
            self.assertEqual(segments[0].click, click, function)
            self.assertEqual(segments[0].hover, ())

        segments = MiniJSON("({hover-text,Text,payload})").get_segments()
        self.assertEqual(plain_text(segments[0].hover), "payload")

    def test_hover_with_click(self):
        segments = MiniJSON("({HOVER-COMMAND,Go,Teleport home,/tp home})").get_segments()
        self.assertEqual(plain_text(segments[0].hover), "Teleport home")
        self.assertEqual(segments[0].click, ClickAction.run_command("/tp home"))

        segments = MiniJSON("({hover-suggest,Msg,Message me,/msg Steve })").get_segments()
        self.assertEqual(plain_text(segments[0].hover), "Message me")
        self.assertEqual(segments[0].click, ClickAction.suggest_command("/msg Steve "))

    def test_unknown_function_is_inert(self):
        segments = MiniJSON("({wiggle,Text,foo})").get_segments()
        self.assertEqual(len(segments), 1)
        self.assertEqual(segments[0].text, "Text")
        self.assertIsNone(segments[0].click)
        self.assertEqual(segments[0].hover, ())

    def test_colored_base_text(self):
        segments = MiniJSON("({url,&cSite,https://example.com})").get_segments()
        self.assertEqual(segments[0].text, "Site")
        self.assertEqual(segments[0].color, Color.legacy("c"))
        self.assertEqual(segments[0].click, ClickAction.open_url("https://example.com"))


if __name__ == '__main__':
    unittest.main()
