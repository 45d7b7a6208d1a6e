"""
Wire-level schema module.

Document nodes for training plans, workout templates, segments and
intensities as they appear on the wire, with reference cells still holding
locators until the resolution pass fills them in.
"""
