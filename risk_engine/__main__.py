import sys

from risk_engine.cli import main

sys.exit(main())
