"""
JSON and HDF5 export of sweep results.
"""

import dataclasses
import json
from pathlib import Path

import h5py
import numpy as np
from pint import Quantity


class AdvancedJSONEncoder(json.JSONEncoder):
    def default(self, o):
        if dataclasses.is_dataclass(o):
            return dataclasses.asdict(o)
        if isinstance(o, Quantity):
            return o.to_base_units().magnitude
        if isinstance(o, np.ndarray):
            if np.iscomplexobj(o):
                return [[z.real, z.imag] for z in o.ravel()]
            return o.tolist()
        if isinstance(o, (complex, np.complexfloating)):
            return [o.real, o.imag]
        if isinstance(o, np.bool_):
            return bool(o)
        if isinstance(o, np.integer):
            return int(o)
        if isinstance(o, np.floating):
            return float(o)
        return super().default(o)


def save_result(result, path) -> Path:
    """Write result.to_dict() as JSON (NaN written as NaN)."""
    path = Path(path)
    with open(path, 'w') as f:
        json.dump(result.to_dict(), f, cls=AdvancedJSONEncoder, indent=2)
    return path


def load_result(path) -> dict:
    """Read a saved result back as plain Python containers."""
    with open(Path(path)) as f:
        return json.load(f)


def save_hdf5(result, path) -> Path:
    """
    Write the sweep arrays to HDF5.

    Layout:
        heights, coefficients, roots (n, 4 complex, NaN padded), is_real,
        degrees : datasets at the root
        branches/<name>/{depth, speed, froude, is_real}
    The depth ratio is stored as a root attribute.
    """
    path = Path(path)
    n_roots = result.coefficients.shape[1] - 1
    is_real = np.zeros((result.n_heights, n_roots), dtype=bool)
    for i, root_set in enumerate(result.root_sets):
        is_real[i, :len(root_set)] = root_set.is_real

    with h5py.File(path, 'w') as f:
        f.attrs['depth_ratio'] = result.depth_ratio
        f['heights'] = result.heights
        f['coefficients'] = result.coefficients
        f['roots'] = result.roots_array()
        f['is_real'] = is_real
        f['degrees'] = result.degrees

        group = f.create_group('branches')
        for name, branch in result.branches.items():
            g = group.create_group(name)
            g['depth'] = branch.depth
            g['speed'] = branch.speed
            g['froude'] = branch.froude
            g['is_real'] = branch.is_real
    return path


def load_hdf5(path) -> dict:
    """Read an HDF5 sweep back into a dict of numpy arrays."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Sweep file not found: {path}")

    with h5py.File(path, 'r') as f:
        data = {key: np.array(f[key])
                for key in ('heights', 'coefficients', 'roots', 'is_real', 'degrees')}
        data['depth_ratio'] = float(f.attrs['depth_ratio'])
        data['branches'] = {
            name: {key: np.array(g[key]) for key in g.keys()}
            for name, g in f['branches'].items()
        }
    return data
