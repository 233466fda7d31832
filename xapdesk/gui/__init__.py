"""
Control surface widgets and controllers.
"""
