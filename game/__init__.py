"""
Game Module - session, level progression and collision
"""
