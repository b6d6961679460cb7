import sys

from dotnetreports.cli import main

sys.exit(main())
