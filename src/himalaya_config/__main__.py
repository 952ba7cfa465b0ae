# =============================================================================
# Himalaya-Config Entry Point for `python -m himalaya_config`
# =============================================================================
# This module allows Himalaya-Config to be run as a Python module:
#
#   python -m himalaya_config
#
# This is equivalent to running the 'himalaya-config' command after
# installation.
# =============================================================================

import sys

from himalaya_config.app import main

if __name__ == "__main__":
    sys.exit(main())
