"""Meety - meeting types, weekly availability and slot booking"""
