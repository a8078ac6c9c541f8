"""Jajang vs jjamppong voting service."""
