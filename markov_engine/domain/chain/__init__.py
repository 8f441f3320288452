# +---------------------+
# |     MarkovChain     |   owns everything below, bound to one DomainOperations
# +---------------------+
#        |        \
#        v         v
# +---------------+  +----------------+
# | StateRegistry |  | WalkGenerator  |
# |  MarkovState  |  |  RandomSelector|
# |  Transition-  |  |  RandomSource  |
# |   Table       |  +----------------+
# +---------------+
#
# Transition tables reference states by handle (registry index), never own them.
