"""
材料模型、工厂和配置单元测试
"""

import logging

import numpy as np
import pytest

from pympm.core.materials import (
    BinghamMaterial,
    MaterialFactory,
    MaterialPoint,
    MohrCoulombMaterial,
    ParticleAccessor,
    PlasticState,
    dirac_delta,
)
from pympm.utils import load_config, save_config


MC_PROPS = {
    'density': 1800.0,
    'youngs_modulus': 1.0e6,
    'poisson_ratio': 0.3,
    'friction': 30.0,
    'dilation': 10.0,
    'cohesion': 5.0,
    'residual_friction': 20.0,
    'residual_dilation': 0.0,
    'residual_cohesion': 1.0,
    'peak_pdstrain': 0.0,
    'critical_pdstrain': 0.05,
    'tension_cutoff': 0.0,
    'porosity': 0.3,
}

BINGHAM_PROPS = {
    'density': 1000.0,
    'youngs_modulus': 1.0e6,
    'poisson_ratio': 0.3,
    'tau0': 1.0,
    'mu': 1.0,
    'critical_shear_rate': 0.1,
}


class TestMohrCoulombMaterial:
    """测试 Mohr-Coulomb 材料"""

    def setup_method(self):
        self.mat = MohrCoulombMaterial(0, MC_PROPS, dim=3)

    def test_angles_in_radians(self):
        assert np.isclose(self.mat.properties.friction, np.radians(30.0))
        assert np.isclose(self.mat.properties.dilation, np.radians(10.0))
        assert self.mat.missing_properties == []

    def test_elastic_tensor_symmetric(self):
        assert np.allclose(self.mat.D, self.mat.D.T)

    def test_thermodynamic_pressure(self):
        """p = -K ε_v，线性且变号"""
        p = self.mat.thermodynamic_pressure(1e-3)
        assert np.isclose(p, -self.mat.K * 1e-3)
        assert np.isclose(self.mat.thermodynamic_pressure(-1e-3), -p)
        assert np.isclose(self.mat.thermodynamic_pressure(2e-3), 2 * p)
        assert self.mat.thermodynamic_pressure(0.0) == 0.0

    def test_isotropic_compression_unchanged(self):
        stress = np.array([-10.0, -10.0, -10.0, 0, 0, 0])
        state = self.mat.create_state()
        updated = self.mat.compute_stress(stress, np.zeros(6), None, state)
        assert np.array_equal(updated, stress)
        assert state.equivalent_plastic_strain == 0.0

    def test_plastic_step_softens(self):
        """塑性步累加状态，下一步强度降低"""
        state = self.mat.create_state()
        stress = np.array([-10.0, -20.0, -30.0, 0, 0, 0])
        result = self.mat.update(stress, np.array([0, 0, 0, 1e-3, 0, 0]), state)

        assert result.is_plastic
        assert state.equivalent_plastic_strain == pytest.approx(result.equivalent_plastic_strain)
        assert state.equivalent_plastic_strain > 0.0
        assert np.allclose(state.plastic_strain, result.plastic_strain)

        strength = self.mat.softening.get_strength(state.equivalent_plastic_strain)
        assert strength.cohesion < 5.0
        assert strength.friction < np.radians(30.0)

    def test_state_accumulates_over_steps(self):
        state = self.mat.create_state()
        stress = np.array([-10.0, -20.0, -30.0, 0, 0, 0])
        dstrain = np.array([0, 0, 0, 1e-4, 0, 0])
        history = []
        for _ in range(3):
            stress = self.mat.compute_stress(stress, dstrain, None, state)
            history.append(state.equivalent_plastic_strain)
            assert np.all(np.isfinite(stress))
        assert history == sorted(history)

    def test_without_state(self):
        """未传入状态时不保存历史"""
        stress = np.array([-10.0, -20.0, -30.0, 0, 0, 0])
        updated = self.mat.compute_stress(stress, np.array([0, 0, 0, 1e-3, 0, 0]))
        assert updated.shape == (6,)
        assert np.all(np.isfinite(updated))

    def test_2d(self):
        mat = MohrCoulombMaterial(1, MC_PROPS, dim=2)
        assert np.array_equal(mat.dirac_delta(), [1, 1, 0, 0, 0, 0])
        updated = mat.compute_stress(
            np.array([-10.0, -20.0, -30.0, 0, 0, 0]),
            np.array([0, 0, 0, 1e-3, 1e-3, 1e-3]),
            None,
            mat.create_state(),
        )
        assert np.all(updated[4:] == 0.0)

    def test_missing_properties(self, caplog):
        """缺少参数: 记录错误、取 0、不抛出"""
        with caplog.at_level(logging.ERROR):
            mat = MohrCoulombMaterial(7, {'youngs_modulus': 1e6})
        assert 'friction' in mat.missing_properties
        assert 'youngs_modulus' not in mat.missing_properties
        assert mat.properties.cohesion == 0.0
        assert any('missing required properties' in r.getMessage() for r in caplog.records)

        updated = mat.compute_stress(np.zeros(6), np.array([1e-4, 0, 0, 0, 0, 0]))
        assert np.all(np.isfinite(updated))

    def test_missing_softening_threshold(self, caplog):
        """缺少一个软化阈值: 取另一个阈值，不抛出"""
        props = dict(MC_PROPS, peak_pdstrain=0.01)
        props.pop('critical_pdstrain')
        with caplog.at_level(logging.ERROR):
            mat = MohrCoulombMaterial(10, props)
        assert 'critical_pdstrain' in mat.missing_properties
        assert mat.softening.peak_pdstrain == 0.01
        assert mat.softening.critical_pdstrain == 0.01
        assert any('step softening' in r.getMessage() for r in caplog.records)

        props = dict(MC_PROPS, critical_pdstrain=0.05)
        props.pop('peak_pdstrain')
        mat = MohrCoulombMaterial(11, props)
        assert mat.softening.peak_pdstrain == 0.05
        assert mat.softening.critical_pdstrain == 0.05

    def test_empty_properties(self):
        mat = MohrCoulombMaterial(8, {})
        state = mat.create_state()
        updated = mat.compute_stress(np.zeros(6), np.full(6, 1e-3), None, state)
        assert np.all(np.isfinite(updated))
        assert np.all(np.isfinite(state.plastic_strain))

    def test_misordered_softening_thresholds(self):
        props = dict(MC_PROPS, peak_pdstrain=0.1, critical_pdstrain=0.05)
        with pytest.raises(ValueError):
            MohrCoulombMaterial(9, props)


class TestBinghamMaterial:
    """测试 Bingham 粘塑性材料"""

    def setup_method(self):
        self.mat = BinghamMaterial(1, BINGHAM_PROPS, dim=3)

    def test_zero_strain_rate(self):
        """应变率为 0: σ = -p δ"""
        for dim in (2, 3):
            mat = BinghamMaterial(1, BINGHAM_PROPS, dim=dim)
            particle = MaterialPoint(strain_rates=[np.zeros(6)], pressures=[5.0])
            stress = mat.compute_stress(np.zeros(6), np.zeros(6), particle)
            assert np.array_equal(stress, -5.0 * dirac_delta(dim))

    def test_shear_rate(self):
        assert np.isclose(self.mat.shear_rate(np.array([0, 0, 0, 0.5, 0, 0])), 1.0)
        assert np.isclose(self.mat.shear_rate(np.array([0.3, -0.3, 0, 0.4, 0, 0])), 1.0)

    def test_below_critical_shear_rate(self):
        assert self.mat.apparent_viscosity(0.05) == 0.0
        assert self.mat.apparent_viscosity(0.1) == 0.0

    def test_above_critical_shear_rate(self):
        assert np.isclose(self.mat.apparent_viscosity(2.0), 2.0 * (1.0 / 2.0 + 1.0))

    def test_critical_shear_rate_floor(self):
        mat = BinghamMaterial(2, dict(BINGHAM_PROPS, critical_shear_rate=0.0))
        assert mat.apparent_viscosity(0.0) == 0.0
        assert mat.apparent_viscosity(1e-3) > 0.0
        assert mat.properties.critical_shear_rate == 0.0

    def test_flowing_deviator(self):
        particle = MaterialPoint(strain_rates=[np.array([0.3, -0.3, 0, 0.8, 0, 0])], pressures=[2.0])
        stress = self.mat.compute_stress(np.zeros(6), np.zeros(6), particle)
        # η = 2 (τ0 / γ̇ + μ) = 4, τ = η [0.3, -0.3, 0, 0.4, 0, 0]
        expected = -2.0 * dirac_delta(3) + 4.0 * np.array([0.3, -0.3, 0, 0.4, 0, 0])
        assert np.allclose(stress, expected)

    def test_doubling_yield_stress_engages_cap(self):
        particle = MaterialPoint(strain_rates=[np.array([0.3, -0.3, 0, 0.8, 0, 0])], pressures=[2.0])
        mat = BinghamMaterial(3, dict(BINGHAM_PROPS, tau0=2.0))
        stress = mat.compute_stress(np.zeros(6), np.zeros(6), particle)
        assert np.allclose(stress, -2.0 * dirac_delta(3))

    def test_cap_boundary(self):
        """0.5 (τ1² + τ2² + τ3²) == τ0² 时不截断"""
        tau = np.array([3.0, 3.0, 0, 1.0, 0, 0])
        mat = BinghamMaterial(4, dict(BINGHAM_PROPS, tau0=3.0))
        assert np.array_equal(mat.yield_cap(tau), tau)

        mat = BinghamMaterial(5, dict(BINGHAM_PROPS, tau0=3.0 + 1e-9))
        assert np.array_equal(mat.yield_cap(tau), np.zeros(6))

    def test_thermodynamic_pressure(self):
        assert np.isclose(self.mat.thermodynamic_pressure(1e-3), -self.mat.K * 1e-3)
        assert np.isclose(
            self.mat.thermodynamic_pressure(-1e-3), -self.mat.thermodynamic_pressure(1e-3)
        )

    def test_2d_ignores_out_of_plane_shear(self):
        """2D: 第 5、6 分量不影响剪切率，也不出现在应力中"""
        mat = BinghamMaterial(6, BINGHAM_PROPS, dim=2)
        particle = MaterialPoint(strain_rates=[np.array([0.3, -0.3, 0, 0.8, 5.0, 5.0])], pressures=[2.0])
        stress = mat.compute_stress(np.zeros(6), np.zeros(6), particle)
        expected = -2.0 * dirac_delta(2) + 4.0 * np.array([0.3, -0.3, 0, 0.4, 0, 0])
        assert np.allclose(stress, expected)
        assert np.all(stress[4:] == 0.0)

    def test_requires_particle(self):
        with pytest.raises(ValueError):
            self.mat.compute_stress(np.zeros(6), np.zeros(6))

    def test_no_state(self):
        assert self.mat.create_state() is None


class TestStateAndInterfaces:
    """测试状态与接口"""

    def test_state_accumulate(self):
        state = PlasticState()
        state.accumulate(np.full(6, 1e-3), 2e-3)
        state.accumulate(np.full(6, 1e-3), 1e-3)
        assert np.isclose(state.equivalent_plastic_strain, 3e-3)
        assert np.allclose(state.plastic_strain, 2e-3)

    def test_state_copy_independent(self):
        state = PlasticState()
        committed = state.copy()
        state.accumulate(np.ones(6), 1.0)
        assert committed.equivalent_plastic_strain == 0.0
        assert np.all(committed.plastic_strain == 0.0)

        state.reset()
        assert state.equivalent_plastic_strain == 0.0

    def test_material_point_is_accessor(self):
        assert isinstance(MaterialPoint(), ParticleAccessor)

    def test_dirac_delta(self):
        assert np.array_equal(dirac_delta(2), [1, 1, 0, 0, 0, 0])
        assert np.array_equal(dirac_delta(3), [1, 1, 1, 0, 0, 0])

    def test_invalid_dimension(self):
        with pytest.raises(ValueError):
            MohrCoulombMaterial(0, MC_PROPS, dim=1)


class TestMaterialFactory:
    """测试材料工厂"""

    def test_create(self):
        assert isinstance(MaterialFactory.create('MohrCoulomb', 0, MC_PROPS), MohrCoulombMaterial)
        assert isinstance(MaterialFactory.create('Bingham', 1, BINGHAM_PROPS, dim=2), BinghamMaterial)

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            MaterialFactory.create('NewtonianFluid', 0, {})

    def test_from_config(self):
        config = {
            'dimension': 2,
            'materials': [
                dict(MC_PROPS, id=0, type='MohrCoulomb'),
                dict(BINGHAM_PROPS, id=1, type='Bingham'),
            ],
        }
        materials = MaterialFactory.from_config(config)
        assert sorted(materials) == [0, 1]
        assert materials[0].dim == 2
        assert isinstance(materials[1], BinghamMaterial)
        assert materials[1].missing_properties == []

    def test_from_config_requires_id_and_type(self):
        with pytest.raises(ValueError):
            MaterialFactory.from_config({'materials': [dict(MC_PROPS, type='MohrCoulomb')]})
        with pytest.raises(ValueError):
            MaterialFactory.from_config({})

    def test_from_yaml(self, tmp_path):
        path = str(tmp_path / 'materials.yaml')
        save_config({'dimension': 3, 'materials': [dict(MC_PROPS, id=5, type='MohrCoulomb')]}, path)
        assert load_config(path)['materials'][0]['friction'] == 30.0

        materials = MaterialFactory.from_yaml(path)
        assert materials[5].dim == 3
        assert np.isclose(materials[5].properties.cohesion, 5.0)

    def test_register(self):
        MaterialFactory.register('Soil', MohrCoulombMaterial)
        try:
            assert 'Soil' in MaterialFactory.types()
            assert isinstance(MaterialFactory.create('Soil', 0, MC_PROPS), MohrCoulombMaterial)
        finally:
            MaterialFactory._registry.pop('Soil')
