import sys

from jtml.cli import main

sys.exit(main())
