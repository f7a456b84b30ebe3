import sys

from pcgbg.cli import main

sys.exit(main())
