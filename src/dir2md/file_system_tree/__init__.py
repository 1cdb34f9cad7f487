"""Filtered, symlink-loop-safe directory trees and their ASCII rendering."""
