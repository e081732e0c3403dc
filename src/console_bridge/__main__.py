import sys

from console_bridge.server import main

sys.exit(main())
