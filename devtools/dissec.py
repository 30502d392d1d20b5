#!/usr/bin/python
"""A standalone dissector for transfer logs
usage: dbi-backend --capture session.log DIR; dissec.py < session.log"""
import sys
from dbibackend.dissect import dissect

for line in dissect(sys.stdin.readlines()):
    print(line)
