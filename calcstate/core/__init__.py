"""Calculator state machine: keys, buffers, states and the context that holds them."""
