import sys

from pyCacheSimLib.sim import main

sys.exit(main())
