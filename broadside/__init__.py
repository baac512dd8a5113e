"""Battleship turn engine with autopilot play."""
