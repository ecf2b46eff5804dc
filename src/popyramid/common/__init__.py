"""src/popyramid/common/__init__.py"""
