# session.py
# simulated environment setup (micromamba / ViralFlow / containers)
#

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from viralflow_gui.config import (
    FAKE_MICROMAMBA_VERSION, FAKE_VIRALFLOW_VERSION,
    DEFAULT_REPO_DIRNAME,
    KIND_STDOUT, KIND_STDERR,
    PANGOLIN_MODES,
)
from viralflow_gui.store import AppConfig, save_config
from viralflow_gui.utils import LogEntry

LogSink = Callable[[LogEntry], None]


class RepoNotConfiguredError(RuntimeError):
    pass


def default_repo_path() -> Path:
    return Path.home() / DEFAULT_REPO_DIRNAME


@dataclass
class InstallStatus:
    micromamba_installed: bool = False
    micromamba_version: Optional[str] = None
    viralflow_installed: bool = False
    viralflow_version: Optional[str] = None
    containers_built: bool = False

    @property
    def ready(self) -> bool:
        return self.micromamba_installed and self.viralflow_installed and self.containers_built

    def to_dict(self) -> dict:
        return {
            "micromambaInstalled": self.micromamba_installed,
            "micromambaVersion": self.micromamba_version,
            "viralflowInstalled": self.viralflow_installed,
            "viralflowVersion": self.viralflow_version,
            "containersBuilt": self.containers_built,
        }


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    message: str = ""
    status: Optional[InstallStatus] = None


@dataclass
class EnvironmentSession:
    """
    Install/build state of one GUI session. Starts with nothing installed
    every time; the containers flag is also mirrored into the persisted
    config so a rebuild is required after a (simulated) reinstall.
    """

    config: AppConfig
    store_dir: Optional[Path] = None
    sink: Optional[LogSink] = None

    micromamba_installed: bool = False
    viralflow_installed: bool = False
    containers_built: bool = False

    # ---------- log ----------
    def _log(self, kind: str, text: str) -> None:
        entry = LogEntry(kind=kind, text=text)
        if self.sink is not None:
            self.sink(entry)

    def _banner(self, title: str) -> None:
        self._log(KIND_STDOUT, f"\n=== [MVP] {title} ===\n")

    def _fail(self, msg: str) -> ActionResult:
        self._log(KIND_STDERR, f"\n{msg}\n")
        return ActionResult(ok=False, message=msg, status=self.check_install())

    def _persist_containers(self, built: bool) -> None:
        self.config.containers_built = built
        save_config(self.config, self.store_dir)

    def _require_tools(self, what: str) -> Optional[ActionResult]:
        if not self.micromamba_installed or not self.viralflow_installed:
            return self._fail(
                f"Micromamba and/or ViralFlow (fake) are not installed. "
                f"Simulate the installation before {what}."
            )
        return None

    # ---------- status ----------
    def check_install(self) -> InstallStatus:
        return InstallStatus(
            micromamba_installed=self.micromamba_installed,
            micromamba_version=FAKE_MICROMAMBA_VERSION if self.micromamba_installed else None,
            viralflow_installed=self.viralflow_installed,
            viralflow_version=FAKE_VIRALFLOW_VERSION if self.viralflow_installed else None,
            containers_built=bool(self.config.containers_built and self.containers_built),
        )

    def viralflow_version(self) -> Optional[str]:
        return FAKE_VIRALFLOW_VERSION if self.viralflow_installed else None

    # ---------- setup actions ----------
    def install_micromamba(self) -> ActionResult:
        self._banner("Simulating micromamba installation")
        self.micromamba_installed = True
        self._log(KIND_STDOUT, f"\nMicromamba (fake) installed. Simulated version: {FAKE_MICROMAMBA_VERSION}\n")
        return ActionResult(ok=True, status=self.check_install())

    def install_viralflow(self) -> ActionResult:
        self._banner("Simulating ViralFlow installation")
        if not self.micromamba_installed:
            return self._fail(
                "Micromamba (fake) is not installed yet. "
                "Simulate the micromamba installation before installing ViralFlow."
            )

        self.viralflow_installed = True
        self._log(KIND_STDOUT, f"\nViralFlow (fake) installed. Simulated version: {FAKE_VIRALFLOW_VERSION}\n")

        # a reinstall invalidates the containers
        self.containers_built = False
        self._persist_containers(False)
        return ActionResult(ok=True, status=self.check_install())

    def build_containers(self) -> ActionResult:
        self._banner("Simulating ViralFlow container build")
        failed = self._require_tools("building the containers")
        if failed:
            return failed

        self.containers_built = True
        self._persist_containers(True)
        self._log(KIND_STDOUT, "\nContainers (fake) built. No real command was executed.\n")
        return ActionResult(ok=True, status=self.check_install())

    def update_pangolin(self, mode: str = "toolAndData") -> ActionResult:
        if mode not in PANGOLIN_MODES:
            raise ValueError(f"Unknown pangolin update mode '{mode}'. Expected one of {PANGOLIN_MODES}")

        self._banner("Simulating Pangolin update")
        failed = self._require_tools("updating Pangolin")
        if failed:
            return failed

        desc = "databases only" if mode == "dataOnly" else "tool and databases"
        self._log(KIND_STDOUT, f"\n[MVP] Pangolin update ({desc}) simulated. No real command was executed.\n")
        return ActionResult(ok=True, status=self.check_install())

    def add_snpeff_entry(self, org_name: str, genome_code: str) -> ActionResult:
        org_name = (org_name or "").strip()
        genome_code = (genome_code or "").strip()
        if not org_name or not genome_code:
            return self._fail("Parameters org_name and genome_code are required.")

        self._banner("Simulating snpEff entry")
        failed = self._require_tools("customizing snpEff")
        if failed:
            return failed

        self._log(
            KIND_STDOUT,
            f'\nEntry (fake) added to snpEff for org_name="{org_name}", '
            f'genome_code="{genome_code}". No real command was executed.\n',
        )
        return ActionResult(ok=True, status=self.check_install())

    # ---------- repository ----------
    def clone_default_repo(self) -> ActionResult:
        target = default_repo_path()
        self.config.repo_path = str(target)
        save_config(self.config, self.store_dir)
        self._log(
            KIND_STDOUT,
            f"\n=== [MVP] Simulating ViralFlow repository clone ===\n"
            f"Simulated repository at: {target}\nNo git command was executed.\n",
        )
        return ActionResult(ok=True, message=str(target))

    def git_pull(self) -> ActionResult:
        if not self.config.repo_path:
            raise RepoNotConfiguredError("Repository path is not configured.")
        self._log(
            KIND_STDOUT,
            f"\n=== [MVP] Simulating git pull (ViralFlow) ===\n"
            f"Repository: {self.config.repo_path}\nNo git command was executed.\n",
        )
        return ActionResult(ok=True, message="[MVP] git pull simulated.")
