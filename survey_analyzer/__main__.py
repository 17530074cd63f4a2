"""Allow ``python -m survey_analyzer``."""

import sys

from survey_analyzer.main import main

sys.exit(main())
