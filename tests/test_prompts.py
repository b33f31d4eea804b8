"""Tests for prompt template loading."""
import pytest

from thinkmate.prompts import clear_cache, get_system_prompt, load_prompt, render_prompt


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_cache()
    yield
    clear_cache()


class TestPrompts:
    def test_bundled_templates_are_trimmed(self):
        system = get_system_prompt()
        assert system
        assert system == system.strip()

    def test_working_directory_override_wins(self, tmp_path, monkeypatch):
        """Test a ./prompts/<name>.txt file replaces the bundled template."""
        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "system.txt").write_text("  Be brief.\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert load_prompt("system") == "Be brief."

    def test_render_fills_placeholders(self):
        prompt = render_prompt("study_plan", topic="Optics", days=4, intensity="Light")
        assert "Optics" in prompt
        assert "{" not in prompt

    def test_missing_template(self):
        with pytest.raises(FileNotFoundError, match="no_such_prompt"):
            load_prompt("no_such_prompt")
