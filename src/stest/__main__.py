import sys

from stest.cli import main


sys.exit(main())
