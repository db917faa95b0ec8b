import sys

from pi.lineedit.cli import main

sys.exit(main())
