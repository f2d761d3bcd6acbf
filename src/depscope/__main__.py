import sys

from depscope.cli import main

sys.exit(main())
