import sys

from sfdx_config.cli import main

sys.exit(main())
