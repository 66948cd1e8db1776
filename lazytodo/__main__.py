"""Module entrypoint for ``python -m lazytodo``.

This keeps module-mode execution behavior identical to the console script.
All argument parsing and runtime setup happen in ``lazytodo.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
