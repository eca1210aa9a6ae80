"""
Library modules shared by the hash engines and the command line interface.
"""
