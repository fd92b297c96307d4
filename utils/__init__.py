"""
Utils package for Realty Admin
"""
