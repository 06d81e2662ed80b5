"""Routing — request path parsing, route patterns and action resolution.

Route tables are declared per controller and compiled once per
controller class into positional segment matchers.
"""
