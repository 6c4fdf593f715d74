class Unit(object):
    """
    A single hidden-layer unit with one scalar input and one scalar output.

    params: input_weight, the weight from the network input to the unit.
            bias, the bias into the unit.
            output_weight, the weight from the unit to the summed output.

    For a scalar input x and activation phi, the unit computes:
    output = output_weight * phi(input_weight * x + bias)

    The activation is not stored on the unit; the owning network passes the
    same :class:`nnfit.activation.Activation` into every call.
    """
    def __init__(self, output_weight, input_weight, bias):
        self.output_weight = float(output_weight)
        self.input_weight = float(input_weight)
        self.bias = float(bias)

        # Starting values, kept for reference and for `reset`.
        self.start_output_weight = self.output_weight
        self.start_input_weight = self.input_weight
        self.start_bias = self.bias

    def __repr__(self):
        return "<Unit output_weight={}, input_weight={}, bias={}>".format(
            self.output_weight, self.input_weight, self.bias)

    def get_params(self):
        """ Returns the current parameters as
        `(output_weight, input_weight, bias)`
        """
        return self.output_weight, self.input_weight, self.bias

    def reset(self):
        """ Restore the parameters the unit was created with
        """
        self.output_weight = self.start_output_weight
        self.input_weight = self.start_input_weight
        self.bias = self.start_bias

    def get_output(self, x, activation):
        """
        Parameters
        ----------
        x: float
            The network input.

        activation: Activation
            The shared activation function/derivative pair.

        Returns
        -------
        out: float
            out = output_weight * phi(input_weight * x + bias)
        """
        return self.output_weight * activation.function(
            self.input_weight * x + self.bias)

    def update_weights(self, table, learning_rate, activation):
        """
        Take one gradient descent step using every sample of `table`.

        The gradient of the squared error with respect to each parameter is
        summed (not averaged) over the table, so the effective step grows
        with the number of samples. The `actual_output` of each sample must
        already hold the network output for the current parameters.

        Parameters
        ----------
        table: SampleTable
            The samples with up-to-date actual outputs.

        learning_rate: float
            Step size for the update.

        activation: Activation
            The shared activation function/derivative pair.
        """
        grad_output = 0.0
        grad_input = 0.0
        grad_bias = 0.0

        for sample in table:
            diff = sample.actual_output - sample.expected_output
            func_input = self.input_weight * sample.input + self.bias

            grad_output += diff * activation.function(func_input)

            # Shared factor of the input weight and bias gradients.
            back = self.output_weight * diff * activation.derivative(
                func_input)

            grad_input += back * sample.input
            grad_bias += back

        self.output_weight -= learning_rate * grad_output
        self.input_weight -= learning_rate * grad_input
        self.bias -= learning_rate * grad_bias
