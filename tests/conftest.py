import os
from unittest.mock import patch

import pytest

from vc_review_helper.config.loader import ENV_OVERRIDES


@pytest.fixture(autouse=True)
def isolate_user_config(tmp_path):
    """Keep the user's own configuration and environment out of the tests.

    The configuration directory is pointed at an empty temporary
    directory and the environment variables that override configuration
    keys are removed for the duration of each test.
    """
    env = {name: value for name, value in os.environ.items() if name not in ENV_OVERRIDES}
    config_dir = tmp_path / "aireview-config"
    config_dir.mkdir()
    with patch.dict(os.environ, env, clear=True):
        with patch("vc_review_helper.config.loader._get_config_directory", return_value=config_dir):
            yield config_dir
