"""Smoke tests for example scripts.

These tests ensure that the example scripts run their main execution paths
without raising exceptions.
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

# Determine the repo root
ROOT = Path(__file__).resolve().parents[1]


def test_multiobjective_demo_runs(tmp_path) -> None:
    """Test that examples/multiobjective_demo.py runs and writes its trajectories."""
    script = ROOT / "examples" / "multiobjective_demo.py"
    assert script.exists(), f"Example script not found: {script}"

    env = dict(os.environ)
    env["MPLBACKEND"] = "Agg"
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(ROOT), env.get("PYTHONPATH", "")) if p
    )
    result = subprocess.run(
        [sys.executable, str(script)],
        capture_output=True,
        text=True,
        check=False,
        cwd=tmp_path,
        env=env,
        timeout=120,
    )

    assert result.returncode == 0, (
        f"Example script failed with return code {result.returncode}.\n"
        f"STDOUT:\n{result.stdout}\n"
        f"STDERR:\n{result.stderr}"
    )
    assert result.stdout.count("Status:") == 3
    for index in range(1, 4):
        assert (tmp_path / "trajectories" / f"trajectory{index}.csv").exists()
