"""Entry point for 'python -m resumebuilder' command.

This module allows the ResumeBuilder CLI to be invoked using
'python -m resumebuilder serve'.
"""

from resumebuilder.cli import main

if __name__ == "__main__":
    main()
