import sys

from photo_report.cli import main

sys.exit(main())
