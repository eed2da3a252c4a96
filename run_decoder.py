#!/usr/bin/env python3
"""
X2/X3 Decoder Runner.

Convenience script to run the decoder CLI from a checkout.

Usage:
    python run_decoder.py pdu <HEX>

Or run as module:
    python -m x2x3_decoder pdu <HEX>
"""

import sys
import os

# Add python directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'python'))

if __name__ == "__main__":
    from x2x3_decoder.__main__ import main
    sys.exit(main())
