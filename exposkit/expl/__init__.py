"""ExpL support: symbol tables, heap runtime routines and the label-to-address table."""