#
#   libfeq : LIBrary for solving Finite-field EQuations f(x) = g(y)
#
