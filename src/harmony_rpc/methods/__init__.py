"""
Method registry - what the node accepts and how to check it.

- validators: primitive format checks
- params:     descriptors and the generic validate/build engine
- catalog:    registration data for every supported method
"""
