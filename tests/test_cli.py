import json
import unittest
from unittest.mock import patch

from click.testing import CliRunner

import vc_review_helper.cli as cli
from vc_review_helper.config.loader import DEFAULT_CONFIG, ConfigError
from vc_review_helper.llm.ollama_client import LLMError


class DummyAgent:
    def __init__(self, chunks=None, error=None):
        self.chunks = chunks or []
        self.error = error
        self.prompts = []
        self.steps_taken = 0

    def run(self, prompt):
        self.prompts.append(prompt)
        for chunk in self.chunks:
            self.steps_taken = 1
            yield chunk
        if self.error is not None:
            raise self.error


def _config(**overrides):
    config = dict(DEFAULT_CONFIG)
    config.update(overrides)
    return config


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()

    def test_streams_review_to_stdout(self) -> None:
        agent = DummyAgent(chunks=["## a.py\n", "Looks good."])
        with patch.object(cli, "load_config", return_value=_config()):
            with patch.object(cli, "build_agent", return_value=agent):
                result = self.runner.invoke(cli.main, ["Review '.' and save report.md"])
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertIn("## a.py\nLooks good.", result.output)
        self.assertEqual(agent.prompts, ["Review '.' and save report.md"])

    def test_default_prompt_uses_dir_and_output(self) -> None:
        agent = DummyAgent(chunks=["ok"])
        with patch.object(cli, "load_config", return_value=_config()):
            with patch.object(cli, "build_agent", return_value=agent):
                result = self.runner.invoke(cli.main, ["--dir", "../my-agent", "--output", "review.md"])
        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS)
        self.assertIn("'../my-agent'", agent.prompts[0])
        self.assertIn("'review.md'", agent.prompts[0])

    def test_config_error_exit_code(self) -> None:
        with patch.object(cli, "load_config", side_effect=ConfigError("bad json")):
            result = self.runner.invoke(cli.main, [])
        self.assertEqual(result.exit_code, cli.EXIT_CONFIG_ERROR)
        self.assertIn("bad json", result.output)

    def test_llm_error_exit_code(self) -> None:
        agent = DummyAgent(chunks=["partial"], error=LLMError("connection refused"))
        with patch.object(cli, "load_config", return_value=_config()):
            with patch.object(cli, "build_agent", return_value=agent):
                result = self.runner.invoke(cli.main, ["go"])
        self.assertEqual(result.exit_code, cli.EXIT_LLM_FAILURE)
        self.assertIn("partial", result.output)
        self.assertIn("connection refused", result.output)

    def test_unexpected_error_exit_code(self) -> None:
        agent = DummyAgent(error=RuntimeError("boom"))
        with patch.object(cli, "load_config", return_value=_config()):
            with patch.object(cli, "build_agent", return_value=agent):
                result = self.runner.invoke(cli.main, ["go"])
        self.assertEqual(result.exit_code, cli.EXIT_GENERIC_ERROR)
        self.assertIn("boom", result.output)

    def test_max_steps_option_is_passed(self) -> None:
        with patch.object(cli, "load_config", return_value=_config()):
            with patch.object(cli, "build_agent", return_value=DummyAgent()) as mock_build:
                self.runner.invoke(cli.main, ["--max-steps", "3", "go"])
        self.assertEqual(mock_build.call_args[0][1], 3)

    def test_max_steps_must_be_positive(self) -> None:
        result = self.runner.invoke(cli.main, ["--max-steps", "0", "go"])
        self.assertEqual(result.exit_code, 2)

    def test_version(self) -> None:
        result = self.runner.invoke(cli.main, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("aireview", result.output)


class TestBuildAgent(unittest.TestCase):
    def test_uses_configuration(self) -> None:
        config = _config(model="qwen2.5-coder", port=8080, api_key="k", max_steps=7, max_tokens=256)
        agent = cli.build_agent(config)
        self.assertEqual(agent.max_steps, 7)
        self.assertEqual(agent.llm_client.model, "qwen2.5-coder")
        self.assertEqual(agent.llm_client.port, 8080)
        self.assertEqual(agent.llm_client.api_key, "k")
        self.assertEqual(agent.llm_client.max_tokens, 256)
        self.assertEqual(len(agent.registry.names()), 3)

    def test_max_steps_override(self) -> None:
        self.assertEqual(cli.build_agent(_config(), max_steps=2).max_steps, 2)


class TestEndToEnd(unittest.TestCase):
    """Run the CLI against a scripted Ollama stream."""

    def test_model_writes_report(self) -> None:
        runner = CliRunner()
        steps = [
            [
                {"message": {"role": "assistant", "content": "", "tool_calls": [
                    {"function": {"name": "generateMarkdownFileTool", "arguments": {
                        "title": "Code Review",
                        "content": "No issues found.",
                        "outputPath": "code-review-report.md",
                    }}},
                ]}, "done": False},
                {"message": {"role": "assistant", "content": ""}, "done": True},
            ],
            [
                {"message": {"role": "assistant", "content": "Report saved."}, "done": False},
                {"message": {"role": "assistant", "content": ""}, "done": True},
            ],
        ]
        requests_seen = []

        class FakeResponse:
            def __init__(self, lines):
                self.status_code = 200
                self.text = ""
                self._lines = lines

            def iter_lines(self, decode_unicode=False):
                return iter(self._lines)

            def close(self):
                pass

        def fake_post(url, **kwargs):
            requests_seen.append([dict(m) for m in kwargs["json"]["messages"]])
            return FakeResponse([json.dumps(line) for line in steps.pop(0)])

        with runner.isolated_filesystem():
            with patch("vc_review_helper.llm.ollama_client.requests.post", fake_post):
                result = runner.invoke(cli.main, ["Write the report"])
            with open("code-review-report.md", encoding="utf-8") as handle:
                report = handle.read()

        self.assertEqual(result.exit_code, cli.EXIT_SUCCESS, result.output)
        self.assertIn("Report saved.", result.output)
        self.assertEqual(report, "# Code Review\n\nNo issues found.\n\n")
        tool_message = requests_seen[1][-1]
        self.assertEqual(tool_message["role"], "tool")
        self.assertTrue(json.loads(tool_message["content"])["success"])


if __name__ == "__main__":
    unittest.main()
