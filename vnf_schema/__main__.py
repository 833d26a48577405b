import sys

from vnf_schema.main import main

sys.exit(main())
