import sys

from bfvm.cli import main

sys.exit(main())
