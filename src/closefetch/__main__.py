import sys

from closefetch.cli import main

sys.exit(main())
