"""
CampusShare Server - Routes Package

One APIRouter per module, included by server.py.
"""
