"""
Traffic network: graph model, traffic light cycling and the network file format.
"""
