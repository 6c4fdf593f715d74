import numpy as np

from nnfit import Network
from nnfit.activation import algebraic_sigmoid
from nnfit.core.logger import setup_logging
from nnfit.data import evenly_spaced_table


random_state = np.random.RandomState(1234)

setup_logging(filename='./fit-log.txt', stdout=True)


# Sample the target function ##################################################

table = evenly_spaced_table(count=20, expected_function=np.sin)

# Set up the network and train it #############################################

network = Network(
    neural_function=algebraic_sigmoid.function,
    derived_function=algebraic_sigmoid.derivative,
    learning_rate=0.001,
    unit_count=4,
    max_iterations=20000,
    max_error=0.0001,
    random_state=random_state,
)

network.set_data(table)

# Each unit gets its own starting point; a shared start would leave the
# four units identical.
network.initialize_network(independent_units=True)
network.run_neural_network()

print("Last error: {:.6f} after {:d} iterations".format(
    network.last_error, network.iteration))

for sample in network.get_data():
    print("{:6.3f} {:9.5f} {:9.5f}".format(
        sample.input, sample.expected_output, sample.actual_output))
