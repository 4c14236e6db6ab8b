"""Application layer: commands and their dispatch"""
