"""
Developer task runner using Invoke.
Run `inv --list` to see tasks.

Key tasks:
  inv classify --name "chicken curry"
  inv suggest --name "frozen peas"
  inv test
  inv clean
"""

from invoke import task
from pathlib import Path
import shutil
import sys


REPO = Path(__file__).parent
DATADIR = REPO / "data"


def _python():
    """Return the python executable inside the current venv."""
    return sys.executable or "python"


def _cli(c, *args, store="memory"):
    quoted = " ".join(f'"{a}"' for a in args)
    c.run(f'"{_python()}" -m cli.freshbite --store {store} {quoted}', pty=False)


@task(help={"name": "Product name to categorize", "store": "memory | json | sqlite"})
def classify(c, name, store="memory"):
    """Detect the category of one product name."""
    _cli(c, "classify", name, store=store)


@task(help={"name": "Product name", "store": "memory | json | sqlite"})
def suggest(c, name, store="memory"):
    """Suggest category and storage for one product name."""
    _cli(c, "suggest", name, store=store)


@task
def test(c):
    """Run unit tests with pytest."""
    c.run(f'"{_python()}" -m pytest -q', pty=False)


@task
def clean(c):
    """Delete local stores under data/."""
    if DATADIR.exists():
        shutil.rmtree(DATADIR)
        print(f"Removed {DATADIR}")
    DATADIR.mkdir(parents=True, exist_ok=True)
