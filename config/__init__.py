"""
Configuration defaults and YAML loading.
"""
