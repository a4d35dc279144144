import sys

from grid_graph.cli import main

sys.exit(main())
