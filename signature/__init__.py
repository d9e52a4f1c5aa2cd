"""
RAMS signature feature.

Captures a signature in one of three modes (typed name, styled name, freehand
drawing), encodes it into a single storable string and renders stored values
back for the document's signature list.
"""
