# context.py
# Class RunContext to wrap a (simulated) ViralFlow run
#

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from viralflow_gui.config import (
    RUN_PARAMS_FILENAME,
    MICROMAMBA_ENV,
    KIND_STDOUT, KIND_STDERR,
)
from viralflow_gui.params_io import normalize_params, write_params_file
from viralflow_gui.resolve import viralflow_cwd
from viralflow_gui.store import AppConfig
from viralflow_gui.utils import LogEntry

FAKE_STDOUT = (
    "MVP: simulated ViralFlow run. The params file was generated, "
    "but no real command was executed.\n"
)


class RunStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class RunCommand:
    cmd: str
    args: List[str]
    params: Dict[str, Any]
    params_path: Path


@dataclass(frozen=True)
class RunOutcome:
    status: RunStatus
    exit_code: int
    command: Optional[RunCommand] = None


@dataclass
class RunContext:
    """
    RunContext prepares and launches one ViralFlow run. The process itself is
    simulated: the .params file is real, the output chunks are canned.
    Output goes through `sink` one chunk at a time, in order.
    """

    params: Optional[Dict[str, Any]]
    config: Optional[AppConfig] = None
    sink: Optional[Callable[[LogEntry], None]] = None
    dry_run: bool = False

    # State populated during the run
    command: Optional[RunCommand] = None
    status: RunStatus = RunStatus.IDLE
    emitted: List[LogEntry] = field(default_factory=list)

    def emit(self, kind: str, text: str) -> None:
        entry = LogEntry(kind=kind, text=text)
        self.emitted.append(entry)
        if self.sink is not None:
            self.sink(entry)

    def params_path(self) -> Path:
        # fixed file, overwritten on every run
        return (viralflow_cwd(self.config) / RUN_PARAMS_FILENAME).resolve()

    def build_command(self) -> RunCommand:
        p = normalize_params(self.params)
        params_path = self.params_path()

        if not self.dry_run:
            write_params_file(params_path, p)

        safe_path = str(params_path).replace('"', '\\"')
        cmd = f'micromamba run -n {MICROMAMBA_ENV} viralflow -run --params "{safe_path}"'
        args = ["micromamba", "run", "-n", MICROMAMBA_ENV, "viralflow", "-run", "--params", str(params_path)]

        self.command = RunCommand(cmd=cmd, args=args, params=p, params_path=params_path)
        return self.command

    def run(self) -> RunOutcome:
        """
        Returns the run outcome:
          exit 0 = success (always, in the MVP)
          exit 1 = the params file could not be written
        """
        if self.params is None:
            self.status = RunStatus.ERROR
            msg = "No parameters loaded."
            self.emit(KIND_STDERR, msg)
            return RunOutcome(status=self.status, exit_code=1)

        self.status = RunStatus.RUNNING

        # 1) normalize + write the .params file, build the command line
        try:
            command = self.build_command()
        except OSError as e:
            self.status = RunStatus.ERROR
            msg = f"Could not write params file: {e}\n"
            self.emit(KIND_STDERR, msg)
            return RunOutcome(status=self.status, exit_code=1)

        # 2) echo the command as a shell would
        self.emit(KIND_STDOUT, f"\n$ {command.cmd}\n")

        # 3) simulated process output
        self.emit(KIND_STDOUT, FAKE_STDOUT)

        self.status = RunStatus.SUCCESS
        return RunOutcome(status=self.status, exit_code=0, command=command)
