"""Entry point for ``python -m workflow_evals``."""

from workflow_evals.cli import main

if __name__ == "__main__":
    main()
