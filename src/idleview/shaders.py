VS = """
#version 330
in vec2 in_vert;
out vec2 uv;
void main(){ gl_Position = vec4(in_vert,0.0,1.0); uv = (in_vert + 1.0)*0.5; }
"""

VS_MESH = """
#version 330
uniform mat4 model;
uniform mat4 view;
uniform mat4 projection;
uniform mat3 normal_matrix;
in vec3 in_position;
in vec3 in_normal;
in vec2 in_uv;
out vec3 v_normal;
out vec2 v_uv;
void main(){
    v_normal = normalize(normal_matrix * in_normal);
    v_uv = in_uv;
    gl_Position = projection * view * model * vec4(in_position, 1.0);
}
"""

# Ambient + two directional lights, ACES filmic tone map, then sRGB encode.
FS_MESH = """
#version 330
in vec3 v_normal;
in vec2 v_uv;
out vec4 fragColor;
uniform sampler2D tex;
uniform vec4 diffuse;
uniform float ambient;
uniform vec3 key_dir;
uniform float key_intensity;
uniform vec3 fill_dir;
uniform float fill_intensity;
uniform float exposure;

vec3 aces(vec3 x){
    const float a = 2.51; const float b = 0.03;
    const float c = 2.43; const float d = 0.59; const float e = 0.14;
    return clamp((x*(a*x + b)) / (x*(c*x + d) + e), 0.0, 1.0);
}

void main(){
    vec4 base = texture(tex, v_uv) * diffuse;
    vec3 n = normalize(v_normal);
    float light = ambient
        + key_intensity * max(dot(n, normalize(key_dir)), 0.0)
        + fill_intensity * max(dot(n, normalize(fill_dir)), 0.0);
    vec3 col = aces(base.rgb * light * exposure);
    fragColor = vec4(pow(col, vec3(1.0/2.2)), base.a);
}
"""

FS_GRAYSCALE = """
#version 330
in vec2 uv; out vec4 fragColor;
uniform sampler2D tDiffuse;
uniform int enabled;
void main(){
    vec4 color = texture(tDiffuse, uv);
    float gray = dot(color.rgb, vec3(0.299, 0.587, 0.114));
    fragColor = enabled == 1 ? vec4(vec3(gray), color.a) : color;
}
"""
