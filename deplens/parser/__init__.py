"""Manifest documents, tolerant scanners and dependency queries."""