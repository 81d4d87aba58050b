"""
Unit tests for interactive setup steps (setup/interactive.py).
"""

import pytest

from devsetup.errors import BootstrapError, ShellSetupError
from devsetup.setup.interactive import (
    LinuxDeviceNamer,
    MacDeviceNamer,
    configure_git,
    ensure_default_shell,
    is_valid_hostname,
    rename_device,
    set_avatar,
    to_hostname,
)


def answers(*values):
    """ask() replacement returning the given answers in order."""
    queue = list(values)
    return lambda prompt: queue.pop(0)


class TestEnsureDefaultShell:
    """Tests for the zsh step."""

    def test_zsh_present_and_default(self, make_runner, make_stack, sample_registry, events):
        runner = make_runner(installed=["zsh"])
        backend, _, _, orchestrator = make_stack(runner, sample_registry)

        assert ensure_default_shell(runner, backend, orchestrator, events) == "/usr/bin/zsh"
        assert not runner.ran("chsh")

    def test_changes_login_shell(self, make_runner, make_stack, sample_registry, events):
        runner = make_runner(installed=["zsh"], environ={"SHELL": "/bin/bash"})
        backend, _, _, orchestrator = make_stack(runner, sample_registry)

        ensure_default_shell(runner, backend, orchestrator, events)

        assert runner.ran("chsh -s /usr/bin/zsh")

    def test_chsh_failure_is_a_warning(self, make_runner, make_stack, sample_registry, events):
        runner = make_runner(installed=["zsh"], environ={"SHELL": "/bin/bash"}).fail("chsh")
        backend, _, _, orchestrator = make_stack(runner, sample_registry)

        ensure_default_shell(runner, backend, orchestrator, events)

        assert any("chsh" in m for m in events.of("warning"))

    def test_installs_zsh_after_bootstrap(self, runner, make_stack, sample_registry, events, pm_script):
        """Test a missing zsh bootstraps the package manager first."""
        runner.on("install-pm", installs="brew").on("brew install zsh", installs="zsh")
        backend, _, _, orchestrator = make_stack(runner, sample_registry)

        ensure_default_shell(runner, backend, orchestrator, events)

        assert runner.calls.index("/bin/bash -c install-pm") < runner.calls.index("brew install zsh")
        # The later package run does not bootstrap again
        orchestrator.run()
        assert runner.calls.count("/bin/bash -c install-pm") == 1

    def test_zsh_install_failure_is_fatal(self, make_runner, make_stack, sample_registry, events):
        runner = make_runner(installed=["brew"]).fail("brew install zsh")
        backend, _, _, orchestrator = make_stack(runner, sample_registry)

        with pytest.raises(ShellSetupError):
            ensure_default_shell(runner, backend, orchestrator, events)

    def test_bootstrap_failure_propagates(self, runner, make_stack, sample_registry, events, pm_script):
        runner.fail("install-pm")
        backend, _, _, orchestrator = make_stack(runner, sample_registry)

        with pytest.raises(BootstrapError):
            ensure_default_shell(runner, backend, orchestrator, events)


class TestConfigureGit:
    """Tests for the git identity prompt."""

    def test_sets_name_and_email(self, runner, events):
        assert configure_git(runner, answers("Ada Lovelace", "ada@example.com"), events)

        assert runner.calls == [
            "git config --global user.name Ada Lovelace",
            "git config --global user.email ada@example.com",
        ]
        assert "Git configured: Ada Lovelace <ada@example.com>" in events.of("success")

    @pytest.mark.parametrize("name,email", [("", "ada@example.com"), ("Ada", ""), ("", "")])
    def test_skipped_without_both(self, runner, events, name, email):
        assert not configure_git(runner, answers(name, email), events)

        assert runner.calls == []
        assert "Git configuration skipped" in events.of("warning")


class TestRenameDevice:
    """Tests for device renaming."""

    def test_empty_answer_keeps_name(self, runner, events):
        runner.outputs["hostname"] = "old-box"

        assert not rename_device(LinuxDeviceNamer(runner), answers(""), events)
        assert "Keeping current name: old-box" in events.of("info")

    def test_linux_rename(self, runner, events):
        runner.outputs["hostname"] = "old-box"

        assert rename_device(LinuxDeviceNamer(runner), answers("new-box"), events)
        assert runner.ran("sudo hostnamectl set-hostname new-box")
        assert runner.ran("sudo sed -i s/127.0.1.1.*/127.0.1.1 new-box/ /etc/hosts")
        assert "Device renamed to: new-box" in events.of("success")

    def test_mac_rename_sets_all_names(self, runner, events):
        runner.outputs["scutil --get ComputerName"] = "Old Mac"

        assert rename_device(MacDeviceNamer(runner), answers("studio"), events)
        for key in ("ComputerName", "LocalHostName", "HostName"):
            assert runner.ran(f"sudo scutil --set {key} studio")

    def test_mac_keeps_display_name(self, runner, events):
        """Test ComputerName takes the name as typed and the host names get a label."""
        assert rename_device(MacDeviceNamer(runner), answers("Jane's MacBook"), events)

        assert runner.ran("sudo scutil --set ComputerName Jane's MacBook")
        assert runner.ran("sudo scutil --set LocalHostName Janes-MacBook")
        assert runner.ran("sudo scutil --set HostName Janes-MacBook")

    def test_mac_rejects_name_without_host_label(self, runner, events):
        assert not rename_device(MacDeviceNamer(runner), answers("!!!"), events)
        assert not runner.ran("scutil --set")

    def test_invalid_name_rejected(self, runner, events):
        assert not rename_device(LinuxDeviceNamer(runner), answers("bad name;rm"), events)
        assert not runner.ran("hostnamectl")
        assert events.of("warning")

    def test_hostnamectl_failure(self, runner, events):
        runner.fail("hostnamectl")

        assert not rename_device(LinuxDeviceNamer(runner), answers("new-box"), events)
        assert events.of("error")

    @pytest.mark.parametrize("name,valid", [
        ("devbox", True),
        ("dev-box-2", True),
        ("-devbox", False),
        ("devbox-", False),
        ("dev box", False),
        ("a" * 64, False),
    ])
    def test_hostname_validation(self, name, valid):
        assert is_valid_hostname(name) is valid

    @pytest.mark.parametrize("name,label", [
        ("studio", "studio"),
        ("Jane's MacBook", "Janes-MacBook"),
        ("  dev  box  ", "dev-box"),
        ("b" * 70, "b" * 63),
    ])
    def test_to_hostname(self, name, label):
        assert to_hostname(name) == label


class TestSetAvatar:
    """Tests for the Ubuntu avatar step."""

    def test_missing_file(self, runner, events, tmp_path):
        assert not set_avatar(runner, tmp_path / "missing.jpeg", events)
        assert events.of("warning")

    def test_copies_to_icons(self, make_runner, events, tmp_path):
        source = tmp_path / "avatar-src.jpeg"
        source.write_bytes(b"\xff\xd8jpeg")
        home = tmp_path / "home"
        runner = make_runner(environ={"HOME": str(home)})

        assert set_avatar(runner, source, events)
        assert (home / ".icons" / "avatar.jpeg").read_bytes() == b"\xff\xd8jpeg"
        assert not runner.ran("AccountsService")

    def test_registers_with_accounts_service(self, make_runner, events, tmp_path):
        source = tmp_path / "avatar-src.jpeg"
        source.write_bytes(b"img")
        runner = make_runner(installed=["gsettings"], environ={"HOME": str(tmp_path / "home")})

        assert set_avatar(runner, source, events)
        assert runner.ran("/var/lib/AccountsService/icons/dev")

    def test_accounts_service_failure_is_a_warning(self, make_runner, events, tmp_path):
        source = tmp_path / "avatar-src.jpeg"
        source.write_bytes(b"img")
        runner = make_runner(installed=["gsettings"], environ={"HOME": str(tmp_path / "home")})
        runner.fail("AccountsService")

        assert set_avatar(runner, source, events)
        assert "Could not set system avatar, using local only" in events.of("warning")

    def test_icons_path_blocked_is_a_warning(self, make_runner, events, tmp_path):
        """Test a copy error warns and returns False instead of raising."""
        source = tmp_path / "avatar-src.jpeg"
        source.write_bytes(b"img")
        home = tmp_path / "home"
        home.mkdir()
        (home / ".icons").write_text("not a directory")
        runner = make_runner(installed=["gsettings"], environ={"HOME": str(home)})

        assert not set_avatar(runner, source, events)
        assert f"Could not copy avatar to {home / '.icons' / 'avatar.jpeg'}" in events.of("warning")
        assert not runner.ran("AccountsService")
