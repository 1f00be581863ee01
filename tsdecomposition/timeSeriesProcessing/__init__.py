"""
Time series processing: decomposition methods and numerical kernels.
"""
