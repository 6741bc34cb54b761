"""Tests for location template variable substitution."""

import os
from pathlib import Path

import pytest

from target_platform.errors import ErrorKind
from target_platform.errors import InvalidLocationError
from target_platform.substitution import VariableSubstitution


def test_plain_template_unchanged():
    assert VariableSubstitution().expand("/opt/eclipse") == "/opt/eclipse"


def test_env_var():
    substitution = VariableSubstitution(environ={"ECLIPSE_HOME": "/opt/eclipse"})

    assert substitution.expand("${env_var:ECLIPSE_HOME}/dropins") == "/opt/eclipse/dropins"


def test_env_var_unset():
    substitution = VariableSubstitution(environ={})

    with pytest.raises(InvalidLocationError, match="ECLIPSE_HOME") as exc_info:
        substitution.expand("${env_var:ECLIPSE_HOME}")

    assert exc_info.value.kind is ErrorKind.INVALID_LOCATION


def test_env_var_requires_argument():
    with pytest.raises(InvalidLocationError, match="requires an argument"):
        VariableSubstitution().expand("${env_var}")


def test_configured_variables():
    substitution = VariableSubstitution({"eclipse_home": "/opt/eclipse", "version": 4})

    assert substitution.expand("${eclipse_home}/v${version}") == "/opt/eclipse/v4"


def test_builtin_variables():
    substitution = VariableSubstitution()

    assert substitution.expand("${user_home}") == str(Path.home())
    assert substitution.expand("${system_property:user.home}") == str(Path.home())
    assert substitution.expand("${system_property:file.separator}") == os.sep


def test_unknown_variable():
    with pytest.raises(InvalidLocationError, match="Unknown variable 'nope'"):
        VariableSubstitution().expand("${nope}/plugins")


def test_unknown_system_property():
    with pytest.raises(InvalidLocationError, match="java.home"):
        VariableSubstitution().expand("${system_property:java.home}")


def test_expand_path_is_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert VariableSubstitution().expand_path("relative/home") == tmp_path / "relative" / "home"
    assert VariableSubstitution().expand_path("~/eclipse") == Path.home() / "eclipse"
