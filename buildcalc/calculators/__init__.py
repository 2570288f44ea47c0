"""
Quantity-calculation engine.

Pure decimal math. Given room dimensions and material options, produce
purchase quantities: beams, fillers, panels, boxes, bags.
"""
