"""
Total-variation reconstruction of tomography images with the TVAL3
algorithm.
"""
