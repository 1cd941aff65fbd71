from idleview import shaders as S


def test_shader_strings_exist():
    for name in ["VS", "VS_MESH", "FS_MESH", "FS_GRAYSCALE"]:
        assert hasattr(S, name)
        assert isinstance(getattr(S, name), str)
        assert getattr(S, name).lstrip().startswith("#version 330")


def test_grayscale_uses_luma_weights():
    assert "vec3(0.299, 0.587, 0.114)" in S.FS_GRAYSCALE
