"""Timetable providers."""
