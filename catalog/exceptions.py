class ProductNotFound(ValueError):
    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"product with id {product_id} not found")


class ProtectedProductError(ValueError):
    def __init__(self):
        super().__init__("Não é possível excluir o serviço de instalação")


class CompatibilityError(ValueError):
    pass


class InvalidBrandName(ValueError):
    def __init__(self):
        super().__init__("nome da marca nao pode ser vazio")


class DuplicateBrandError(ValueError):
    def __init__(self):
        super().__init__("marca ja cadastrada")


class ImageUploadError(ValueError):
    pass


class BrandNotFound(ValueError):
    def __init__(self, brand_id):
        self.brand_id = brand_id
        super().__init__(f"marca {brand_id} nao encontrada")
