"""Domain layer"""
