#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Merge shipping labels with their order slips into print-ready PDFs.
"""

import sys

import shipping_label_merger.cli


if __name__ == "__main__":
	sys.exit(shipping_label_merger.cli.main())
