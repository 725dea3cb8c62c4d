import sys

from crossarea_mc.cli import main

sys.exit(main())
