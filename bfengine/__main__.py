import sys

from bfengine.cli import main

sys.exit(main())
