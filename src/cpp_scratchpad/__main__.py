import sys

from cpp_scratchpad.cli import main

sys.exit(main())
