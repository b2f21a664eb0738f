import logging
import os
import subprocess
import sys
from pathlib import Path

from chirpy.core.logging import configure_logging

REPO_ROOT = Path(__file__).resolve().parent.parent


def import_config_in(cwd, env):
    """Import chirpy.core.config in a fresh interpreter and report what it picked up."""
    code = (
        "import logging\n"
        "from chirpy.core import config\n"
        "print(logging.getLevelName(logging.getLogger('chirpy').level))\n"
        "print(config.REFRESH_TOKEN_EXPIRE_DAYS)\n"
    )
    result = subprocess.run(
        [sys.executable, "-c", code],
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.split()


def clean_env():
    env = {
        key: value
        for key, value in os.environ.items()
        if key not in ("LOG_LEVEL", "REFRESH_TOKEN_EXPIRE_DAYS")
    }
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    return env


def test_dotenv_settings_apply_to_logging(tmp_path):
    (tmp_path / ".env").write_text("LOG_LEVEL=DEBUG\nREFRESH_TOKEN_EXPIRE_DAYS=7\n")

    assert import_config_in(tmp_path, clean_env()) == ["DEBUG", "7"]


def test_defaults_without_dotenv(tmp_path):
    assert import_config_in(tmp_path, clean_env()) == ["INFO", "60"]


def test_configure_logging_reads_environment(monkeypatch):
    chirpy_logger = logging.getLogger("chirpy")
    original = chirpy_logger.level

    monkeypatch.setenv("LOG_LEVEL", "warning")
    try:
        configure_logging()
        assert chirpy_logger.level == logging.WARNING
    finally:
        chirpy_logger.setLevel(original)
