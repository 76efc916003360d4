import dataclasses

import pytest

from pgauditsetup.models import RunConfig


def test_run_config_defaults():
    config = RunConfig(container="pg")

    assert (config.user, config.database, config.password) == ("postgres", "postgres", "postgres")


@pytest.mark.parametrize("password", ["", "x", "correct horse battery staple"])
def test_masked_password_has_one_asterisk_per_character(password):
    masked = RunConfig(container="pg", password=password).masked_password

    assert masked == "*" * len(password)


def test_run_config_is_immutable():
    config = RunConfig(container="pg")

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.container = "other"
