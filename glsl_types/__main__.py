from glsl_types.main import app

app()
