import sys

from seedpass.cli import main

sys.exit(main())
