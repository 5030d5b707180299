import sys

from xcode_cloud_trigger.main import main

sys.exit(main())
