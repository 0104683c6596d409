class OrderNotFound(ValueError):
    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Pedido {order_id} não encontrado")


class InvalidCartItem(ValueError):
    pass


class InstallationServiceUnavailable(ValueError):
    def __init__(self):
        super().__init__("O serviço de instalação está indisponível no momento")
