import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from llmtictactoe import llm_client
from llmtictactoe.llm_client import LLMTransportError, generate_text
from llmtictactoe.llm_player import LLMPlayer


def _reply(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class GenerateTextTests(unittest.TestCase):
    def test_returns_reply_text_and_passes_options(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _reply(" 4 ")
        with patch.object(llm_client, "_CLIENT", client):
            text = generate_text("prompt", model="llama3.2", temperature=0.7)
        self.assertEqual(text, " 4 ")
        kwargs = client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "llama3.2")
        self.assertEqual(kwargs["temperature"], 0.7)
        self.assertEqual(kwargs["messages"], [{"role": "user", "content": "prompt"}])

    def test_temperature_omitted_when_unset(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _reply("4")
        with patch.object(llm_client, "_CLIENT", client):
            generate_text("prompt", model="m")
        self.assertNotIn("temperature", client.chat.completions.create.call_args.kwargs)

    def test_list_content_parts_are_joined(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _reply([{"type": "text", "text": "I pick"}, SimpleNamespace(text="7")])
        with patch.object(llm_client, "_CLIENT", client):
            self.assertEqual(generate_text("prompt", model="m"), "I pick\n7")

    def test_sdk_error_becomes_transport_error(self):
        client = MagicMock()
        client.chat.completions.create.side_effect = ConnectionError("refused")
        with patch.object(llm_client, "_CLIENT", client):
            with self.assertRaises(LLMTransportError):
                generate_text("prompt", model="m")
        self.assertEqual(client.chat.completions.create.call_count, 1)

    def test_empty_reply_becomes_transport_error(self):
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        with patch.object(llm_client, "_CLIENT", client):
            with self.assertRaises(LLMTransportError):
                generate_text("prompt", model="m")

    def test_malformed_reply_becomes_transport_error(self):
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(choices=[SimpleNamespace()])
        with patch.object(llm_client, "_CLIENT", client), self.assertLogs("llm_client", level="ERROR"):
            with self.assertRaises(LLMTransportError):
                generate_text("prompt", model="m")

    def test_model_required(self):
        with self.assertRaises(ValueError):
            generate_text("prompt", model="")


class LLMPlayerTests(unittest.TestCase):
    def test_generate_delegates_with_player_settings(self):
        player = LLMPlayer(model="qwen2.5", temperature=0.2)
        with patch("llmtictactoe.llm_player.generate_text", return_value="5") as gen:
            self.assertEqual(player.generate("p"), "5")
        gen.assert_called_once_with("p", model="qwen2.5", temperature=0.2)

    def test_label_and_validation(self):
        self.assertEqual(LLMPlayer(model="mistral").label(), "mistral")
        self.assertEqual(LLMPlayer(model="mistral", name="M").label(), "M")
        with self.assertRaises(ValueError):
            LLMPlayer(model=" ")
        with self.assertRaises(ValueError):
            LLMPlayer(model="m", temperature=2.5)


if __name__ == "__main__":
    unittest.main()
