"""
Viewer — pygame visualization of a running solve (--interactive)
"""
